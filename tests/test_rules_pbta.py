"""Tests for the 2d6 (Powered by the Apocalypse) rules engine."""

import pytest

from taleweaver.domain.rules.pbta import PbtaEngine, classify
from taleweaver.models.rules import CheckInput, CheckResult, Tier
from tests.conftest import scripted_engine, table_lookup


class TestAbilityCheck:
    def test_partial_success(self):
        engine = scripted_engine(PbtaEngine, 3, 5)
        result = engine.ability_check(CheckInput(actor_id="pc1"))
        assert result.tier is Tier.PARTIAL
        assert result.success is True
        assert result.roll_total == 8
        assert result.margin == 1
        assert result.detail == "2d6(3+5) + 0 => partial"
        assert result.rolls == [3, 5]

    @pytest.mark.parametrize(
        "dice, tier, success, margin",
        [
            ((1, 2), Tier.MISS, False, -3),
            ((3, 3), Tier.MISS, False, 0),
            ((3, 4), Tier.PARTIAL, True, 0),
            ((4, 5), Tier.PARTIAL, True, 2),
            ((5, 5), Tier.FULL, True, 0),
            ((6, 6), Tier.FULL, True, 2),
        ],
    )
    def test_tier_margins(self, dice, tier, success, margin):
        result = scripted_engine(PbtaEngine, *dice).ability_check(CheckInput(actor_id="pc1"))
        assert result.tier is tier
        assert result.success is success
        assert result.margin == margin

    def test_modifier_shifts_tier(self):
        lookup = table_lookup({"pc1": {"hot": 2}})
        engine = scripted_engine(PbtaEngine, 4, 4, stat_lookup=lookup)
        result = engine.ability_check(CheckInput(actor_id="pc1", skill="hot"))
        assert result.roll_total == 10
        assert result.tier is Tier.FULL
        assert result.detail == "2d6(4+4) + 2 => full"

    def test_tags_rendered_in_detail(self):
        engine = scripted_engine(PbtaEngine, 2, 2)
        result = engine.ability_check(
            CheckInput(actor_id="pc1", tags=["desperate", "controlled"])
        )
        assert result.detail == "2d6(2+2) + 0 => miss [desperate, controlled]"

    def test_tags_do_not_change_math(self):
        plain = scripted_engine(PbtaEngine, 4, 5).ability_check(CheckInput(actor_id="pc1"))
        tagged = scripted_engine(PbtaEngine, 4, 5).ability_check(
            CheckInput(actor_id="pc1", tags=["risky"])
        )
        assert (plain.success, plain.roll_total, plain.margin, plain.tier) == (
            tagged.success,
            tagged.roll_total,
            tagged.margin,
            tagged.tier,
        )

    def test_difficulty_is_ignored(self):
        result = scripted_engine(PbtaEngine, 4, 4).ability_check(
            CheckInput(actor_id="pc1", difficulty=20)
        )
        assert result.success is True
        assert result.tier is Tier.PARTIAL

    def test_tier_law(self):
        engine = PbtaEngine(seed=77)
        for _ in range(300):
            result = engine.ability_check(CheckInput(actor_id="pc1"))
            total = result.roll_total
            assert total == sum(result.rolls)
            if total <= 6:
                assert result.tier is Tier.MISS
            elif total <= 9:
                assert result.tier is Tier.PARTIAL
            else:
                assert result.tier is Tier.FULL
            assert result.success == (total >= 7)


def test_classify_boundaries():
    assert classify(6) is Tier.MISS
    assert classify(7) is Tier.PARTIAL
    assert classify(9) is Tier.PARTIAL
    assert classify(10) is Tier.FULL
    assert classify(-1) is Tier.MISS


def test_damage_roll_uses_generic_grammar():
    engine = scripted_engine(PbtaEngine, 4, 2)
    result = engine.damage_roll("2d6+1")
    assert result.total == 7
    assert result.breakdown == [4, 2]


def test_turn_order_keeps_input_order():
    ids = ["a", "b", "c"]
    order = PbtaEngine().turn_order(ids)
    assert order == ids
    assert order is not ids


class TestApplyOutcome:
    def test_miss_marks_xp(self):
        miss = CheckResult(
            success=False, roll_total=5, detail="2d6(2+3) + 0 => miss", margin=-1, tier=Tier.MISS
        )
        state = {"xp": 2}
        updated = PbtaEngine().apply_outcome(miss, state)
        assert updated["xp"] == 3
        assert updated["last_check"]["tier"] == "miss"
        assert state == {"xp": 2}

    def test_hit_does_not_mark_xp(self):
        hit = CheckResult(
            success=True, roll_total=11, detail="2d6(5+6) + 0 => full", margin=1, tier=Tier.FULL
        )
        updated = PbtaEngine().apply_outcome(hit, {})
        assert "xp" not in updated
        assert updated["last_check"]["success"] is True


def test_untiered_failure_marks_xp():
    # A d20-shaped result (no tier) still counts as a miss when it failed.
    failed = CheckResult(success=False, roll_total=4, detail="1d20(4) + 0 vs DC 10", margin=-6)
    assert PbtaEngine().apply_outcome(failed, {"xp": 1})["xp"] == 2


def test_untiered_success_does_not_mark_xp():
    passed = CheckResult(success=True, roll_total=15, detail="1d20(15) + 0 vs DC 10", margin=5)
    assert "xp" not in PbtaEngine().apply_outcome(passed, {})
