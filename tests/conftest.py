import sys
import warnings
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolate_content_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CONTENTGEN_DATABASE_URL",
        "CONTENTGEN_SEED",
        "CONTENTGEN_LOG_LEVEL",
        "CONTENTGEN_NORMALIZE_WEIGHTS",
        "CONTENTGEN_STRICT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def surface_ambiguity_warnings():
    from contentgen.domain.errors import ResolutionAmbiguityWarning

    with warnings.catch_warnings():
        warnings.simplefilter("always", ResolutionAmbiguityWarning)
        yield
