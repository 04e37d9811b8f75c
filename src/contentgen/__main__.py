from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from contentgen.application.services.balance_tables import kills_to_level
from contentgen.application.services.content_builder import build_race_index
from contentgen.application.services.seed_policy import derive_rng
from contentgen.application.services.stat_scaler import monster_stats
from contentgen.bootstrap import ContentSettings, create_content_builder, run_generation
from contentgen.infrastructure.content import race_definitions, variant_definitions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate the content catalog")
    parser.add_argument(
        "--preview-level",
        type=int,
        default=0,
        help="Also print one seeded roll per variant and the kills needed to clear this level",
    )
    return parser


def _print_preview(seed: int, level: int) -> None:
    races = build_race_index(race_definitions())
    print(f"\nVariant preview (seed={seed}, level={level}):")
    for variant in variant_definitions():
        race = races.get(variant.race_tag)
        if race is None:
            continue
        rng = derive_rng("monster_preview", {"seed": seed, "variant": variant.id})
        instance = monster_stats(race, variant, rng)
        print(
            f"- {variant.id:<20} grade={instance.grade:6.2f} exp={instance.experience:<4} "
            f"gold={instance.gold:<4} kills={kills_to_level(instance.experience, level)}"
        )


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    settings = ContentSettings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    report = run_generation(create_content_builder(settings))
    print(f"Created: {len(report.created)}")
    print(f"Skipped (already present): {len(report.skipped)}")
    print(f"Failed: {len(report.failed)}")
    for failure in report.failed:
        print(f"- {failure.identity or failure.record_id}: {failure.message}")
        for problem in failure.problems:
            print(f"    {problem}")

    if args.preview_level > 0:
        _print_preview(settings.seed, args.preview_level)

    if settings.strict and not report.ok:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
