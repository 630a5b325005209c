from __future__ import annotations

import math

import pytest

from ppcalc.models.mod import convert_mods
from ppcalc.models.scores import Score
from ppcalc.pp import LegacyPerformanceCalculator
from ppcalc.pp import RelaxPerformanceCalculator
from ppcalc.pp import acc_calc
from ppcalc.pp import acc_round
from ppcalc.pp import pp_base
from tests.conftest import standard_difficulty


def make_score(mods=0, n300=590, n100=10, n50=0, nmiss=0, combo=1100) -> Score:
    return Score(
        mods=convert_mods(mods),
        n300=n300,
        n100=n100,
        n50=n50,
        nmiss=nmiss,
        combo=combo,
    )


def test_acc_calc():
    assert acc_calc(100, 0, 0, 0) == 1.0
    assert acc_calc(0, 0, 0, 0) == 0.0
    assert acc_calc(0, 0, 0, 10) == 0.0
    assert acc_calc(1, 1, 1, 1) == pytest.approx(450 / 1200)


@pytest.mark.parametrize("acc", [100.0, 99.0, 95.5, 90.0, 60.0])
def test_acc_round_is_close_and_consistent(acc):
    n300, n100, n50 = acc_round(acc, 600, 2)

    assert n300 + n100 + n50 + 2 == 600
    assert min(n300, n100, n50) >= 0
    assert acc_calc(n300, n100, n50, 2) * 100 == pytest.approx(
        min(acc, acc_calc(598, 0, 0, 2) * 100), abs=0.2
    )


def test_score_accuracy():
    score = make_score(n300=90, n100=10, n50=0, nmiss=0)

    assert score.total_hits == 100
    assert score.acc == pytest.approx((90 * 300 + 10 * 100) / 30000)


def test_pp_base_floor():
    assert pp_base(0.0) == pytest.approx(1 / 100000.0)
    assert pp_base(3.0) > pp_base(2.0)


class TestRelax:
    def test_result_is_finite(self):
        result = RelaxPerformanceCalculator(standard_difficulty(), make_score()).calculate()

        assert math.isfinite(result.pp)
        assert result.pp > 0
        assert result.effective_miss_count == 0
        assert result.pp_flashlight == 0

    def test_relax_has_no_speed(self):
        result = RelaxPerformanceCalculator(standard_difficulty(), make_score(mods=128)).calculate()

        assert result.pp_speed == 0
        assert result.pp_aim > 0

    def test_autopilot_has_no_aim(self):
        result = RelaxPerformanceCalculator(standard_difficulty(), make_score(mods=8192)).calculate()

        assert result.pp_aim == 0
        assert result.pp_speed > 0

    def test_hidden_adds_aim(self):
        plain = RelaxPerformanceCalculator(standard_difficulty(), make_score(mods=128)).calculate()
        hidden = RelaxPerformanceCalculator(standard_difficulty(), make_score(mods=128 | 8)).calculate()

        assert hidden.pp_aim > plain.pp_aim
        assert hidden.pp_acc > plain.pp_acc

    def test_flashlight_component(self):
        result = RelaxPerformanceCalculator(standard_difficulty(), make_score(mods=128 | 1024)).calculate()

        assert result.pp_flashlight > 0

    def test_combo_based_miss_count(self):
        result = RelaxPerformanceCalculator(
            standard_difficulty(), make_score(combo=500)
        ).calculate()

        # (1100 - 0.1 * 200) / 500
        assert result.effective_miss_count == pytest.approx(2.16)

    def test_misses_lower_pp(self):
        clean = RelaxPerformanceCalculator(standard_difficulty(), make_score()).calculate()
        missed = RelaxPerformanceCalculator(
            standard_difficulty(), make_score(n300=585, nmiss=5, combo=900)
        ).calculate()

        assert missed.pp < clean.pp
        assert missed.effective_miss_count >= 5


class TestLegacy:
    def test_result_is_finite(self):
        result = LegacyPerformanceCalculator(standard_difficulty(), make_score()).calculate()

        assert math.isfinite(result.pp)
        assert result.pp > 0
        assert result.pp_flashlight is None
        assert result.effective_miss_count == 0.0

    def test_effective_miss_count_is_the_miss_count(self):
        result = LegacyPerformanceCalculator(
            standard_difficulty(), make_score(n300=587, nmiss=3, combo=700)
        ).calculate()

        assert result.effective_miss_count == 3.0

    def test_flashlight_boosts_aim(self):
        plain = LegacyPerformanceCalculator(standard_difficulty(), make_score()).calculate()
        fl = LegacyPerformanceCalculator(standard_difficulty(), make_score(mods=1024)).calculate()

        assert fl.pp_aim > plain.pp_aim

    def test_score_v2_judges_every_object(self):
        # a 100 on a slider costs nothing in v1 but counts in v2
        score = make_score(n300=600, n100=2, n50=0)
        v1 = LegacyPerformanceCalculator(standard_difficulty(), score, score_version=1).calculate()
        v2 = LegacyPerformanceCalculator(standard_difficulty(), score, score_version=2).calculate()

        assert v1.pp_acc != v2.pp_acc

    def test_no_fail_multiplier(self):
        plain = LegacyPerformanceCalculator(standard_difficulty(), make_score()).calculate()
        nf = LegacyPerformanceCalculator(standard_difficulty(), make_score(mods=1)).calculate()

        assert nf.pp == pytest.approx(plain.pp * 0.9)
