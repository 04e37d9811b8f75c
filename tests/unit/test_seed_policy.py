import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from contentgen.application.services.seed_policy import derive_rng, derive_seed


class SeedPolicyTests(unittest.TestCase):
    def test_same_context_same_seed(self) -> None:
        context = {"seed": 9, "variant": "Goblin_Normal", "floor": {"depth": 3, "biome": "cave"}}
        self.assertEqual(derive_seed("monster_preview", context), derive_seed("monster_preview", context))

    def test_context_key_order_does_not_change_seed(self) -> None:
        context_a = {"a": 1, "b": {"x": 2, "y": 3}}
        context_b = {"b": {"y": 3, "x": 2}, "a": 1}
        self.assertEqual(derive_seed("floor.spawn", context_a), derive_seed("floor.spawn", context_b))

    def test_namespace_changes_seed(self) -> None:
        context = {"value": 10}
        self.assertNotEqual(derive_seed("floor.spawn", context), derive_seed("monster_preview", context))

    def test_unordered_set_values_produce_stable_seed(self) -> None:
        context_a = {"used": {"shrine_invincibility", "trial_sacrifice", "portal_escape"}}
        context_b = {"used": frozenset({"portal_escape", "shrine_invincibility", "trial_sacrifice"})}
        self.assertEqual(derive_seed("floor.spawn", context_a), derive_seed("floor.spawn", context_b))

    def test_non_finite_float_in_context_raises(self) -> None:
        with self.assertRaises(ValueError):
            derive_seed("world_event.roll", {"grade": float("inf")})

    def test_derive_rng_is_deterministic_for_same_context(self) -> None:
        context = {"seed": 12, "variant": "Orc_Elite"}
        rng_a = derive_rng("monster_preview", context)
        rng_b = derive_rng("monster_preview", context)
        self.assertEqual(rng_a.randint(1, 1000), rng_b.randint(1, 1000))

    def test_derive_rng_changes_with_namespace(self) -> None:
        context = {"seed": 12, "variant": "Orc_Elite"}
        rng_a = derive_rng("monster_preview", context)
        rng_b = derive_rng("world_event.roll", context)
        self.assertNotEqual([rng_a.randint(1, 1000) for _ in range(5)], [rng_b.randint(1, 1000) for _ in range(5)])


if __name__ == "__main__":
    unittest.main()
