from __future__ import annotations
from abc import abstractmethod

import math
from typing import Protocol

from ppcalc.mapper import LegacyDifficulty
from ppcalc.mapper import LegacyResult
from ppcalc.models.attributes import DifficultyAttributes
from ppcalc.models.mod import has_mod
from ppcalc.models.scores import Score


class PerformanceCalculator(Protocol):
    def __init__(self, attributes: DifficultyAttributes, score: Score):
        ...

    @abstractmethod
    def calculate(self) -> LegacyResult:
        ...


class RelaxPerformanceCalculator(PerformanceCalculator):
    """Performance formula used for relax and autopilot plays."""

    def __init__(self, attributes: DifficultyAttributes, score: Score):
        self.attributes = attributes
        self.score = score

    def calculate(self) -> LegacyResult:
        effective_miss_count = self.calculate_effective_miss_count()

        multiplier = 1.12

        if has_mod(self.score.mods, "NF"):
            multiplier *= max(0.9, 1.0 - 0.02 * effective_miss_count)

        if has_mod(self.score.mods, "SO") and self.score.total_hits > 0:
            multiplier *= 1.0 - pow(
                self.attributes.n_spinners / self.score.total_hits, 0.85
            )

        aim_value = self.compute_aim_value()
        speed_value = self.compute_speed_value()
        accuracy_value = self.compute_accuracy_value()
        flashlight_value = self.compute_flashlight_value()

        total_pp = (
            pow(
                pow(aim_value, 1.1)
                + pow(speed_value, 1.1)
                + pow(accuracy_value, 1.1)
                + pow(flashlight_value, 1.1),
                1.0 / 1.1,
            )
            * multiplier
        )

        return LegacyResult(
            difficulty=legacy_difficulty(self.attributes),
            pp=total_pp,
            pp_acc=accuracy_value,
            pp_aim=aim_value,
            pp_speed=speed_value,
            pp_flashlight=flashlight_value,
            effective_miss_count=effective_miss_count,
        )

    def compute_aim_value(self) -> float:
        if has_mod(self.score.mods, "AP"):
            return 0.0

        raw_aim = self.attributes.aim
        if has_mod(self.score.mods, "TD"):
            raw_aim = pow(raw_aim, 0.8)

        aim_value = pp_base(raw_aim)

        length_bonus = self.length_bonus()
        aim_value *= length_bonus

        effective_miss_count = self.calculate_effective_miss_count()
        if effective_miss_count > 0:
            aim_value *= 0.97 * pow(
                1 - pow(effective_miss_count / self.score.total_hits, 0.775),
                effective_miss_count,
            )

        aim_value *= self.get_combo_scaling_factor()

        ar_factor = 0.0
        if self.attributes.ar > 10.33:
            _ar_factor = 0.2 if has_mod(self.score.mods, "RX") else 0.3

            if self.attributes.ar > 10.67 and has_mod(self.score.mods, "RX"):
                _ar_factor += 0.1

            ar_factor = _ar_factor * (self.attributes.ar - 10.33)
        elif self.attributes.ar < 8.0:
            ar_factor = 0.1 * (8.0 - self.attributes.ar)

        aim_value *= 1.0 + ar_factor * length_bonus

        if has_mod(self.score.mods, "HD"):
            initial_hidden_factor = 0.05 if has_mod(self.score.mods, "RX") else 0.04
            scaled_hidden_factor = 11.0 if has_mod(self.score.mods, "RX") else 12.0

            aim_value *= 1.0 + initial_hidden_factor * (
                scaled_hidden_factor - self.attributes.ar
            )

        estimated_difficult_sliders = self.attributes.n_sliders * 0.15
        if self.attributes.n_sliders > 0:
            estimated_slider_ends_dropped = clamp(
                minimum=0,
                value=min(
                    self.score.n100 + self.score.n50 + self.score.nmiss,
                    self.attributes.max_combo - self.score.combo,
                ),
                maximum=estimated_difficult_sliders,
            )

            slider_nerf_factor = (1 - self.attributes.slider_factor) * pow(
                1 - estimated_slider_ends_dropped / estimated_difficult_sliders,
                3,
            ) + self.attributes.slider_factor

            aim_value *= slider_nerf_factor

        aim_value *= self.score.acc
        aim_value *= 0.98 + pow(self.attributes.od, 2) / 2500

        return aim_value

    def compute_speed_value(self) -> float:
        if has_mod(self.score.mods, "RX"):
            return 0.0

        speed_value = pp_base(self.attributes.speed)

        length_bonus = self.length_bonus()
        speed_value *= length_bonus

        effective_miss_count = self.calculate_effective_miss_count()
        if effective_miss_count > 0:
            speed_value *= 0.97 * pow(
                1 - pow(effective_miss_count / self.score.total_hits, 0.775),
                pow(effective_miss_count, 0.875),
            )

        speed_value *= self.get_combo_scaling_factor()

        ar_factor = 0.0
        if self.attributes.ar > 10.33:
            ar_factor = 0.3 * (self.attributes.ar - 10.33)

        speed_value *= 1.0 + ar_factor * length_bonus

        if has_mod(self.score.mods, "HD"):
            speed_value *= 1.0 + 0.04 * (12.0 - self.attributes.ar)

        speed_value *= (0.95 + pow(self.attributes.od, 2) / 750) * pow(
            self.score.acc, (14.5 - max(self.attributes.od, 8)) / 2
        )

        fifty_threshold = self.score.total_hits / 500.0
        if self.score.n50 >= fifty_threshold:
            speed_value *= pow(0.98, self.score.n50 - fifty_threshold)

        return speed_value

    def compute_accuracy_value(self) -> float:
        better_acc_percentage = 0.0
        object_count_with_accuracy = self.attributes.n_circles

        if object_count_with_accuracy > 0:
            better_acc_percentage = max(
                (
                    (
                        (
                            self.score.n300
                            - (self.score.total_hits - object_count_with_accuracy)
                        )
                        * 6
                        + self.score.n100 * 2
                        + self.score.n50
                    )
                    / (object_count_with_accuracy * 6)
                ),
                0.0,
            )

        acc_value = (
            pow(1.52163, self.attributes.od)
            * pow(better_acc_percentage, 24.0)
            * 2.83
        )

        acc_value *= min(1.15, pow(object_count_with_accuracy / 1000.0, 0.3))

        if has_mod(self.score.mods, "HD"):
            acc_value *= 1.08

        if has_mod(self.score.mods, "FL"):
            acc_value *= 1.02

        return acc_value

    def compute_flashlight_value(self) -> float:
        if not has_mod(self.score.mods, "FL"):
            return 0.0

        raw_fl = self.attributes.flashlight

        if has_mod(self.score.mods, "TD"):
            raw_fl = pow(raw_fl, 0.8)

        fl_value = pow(raw_fl, 2.0) * 25.0

        effective_miss_count = self.calculate_effective_miss_count()
        if effective_miss_count > 0:
            fl_value *= 0.97 * pow(
                1 - pow(effective_miss_count / self.score.total_hits, 0.775),
                pow(effective_miss_count, 0.875),
            )

        fl_value *= self.get_combo_scaling_factor()

        fl_value *= (
            0.7
            + 0.1 * min(1.0, self.score.total_hits / 200.0)
            + (
                0.2 * min(1.0, (self.score.total_hits - 200) / 200.0)
                if self.score.total_hits > 200
                else 0.0
            )
        )

        fl_value *= 0.5 + self.score.acc / 2.0
        fl_value *= 0.98 + pow(self.attributes.od, 2) / 2500

        return fl_value

    def calculate_effective_miss_count(self) -> float:
        combo_based_miss_count = 0.0

        if self.attributes.n_sliders > 0:
            full_combo_threshold = (
                self.attributes.max_combo - 0.1 * self.attributes.n_sliders
            )
            if self.score.combo < full_combo_threshold:
                combo_based_miss_count = full_combo_threshold / max(
                    1.0,
                    self.score.combo,
                )

        combo_based_miss_count = min(combo_based_miss_count, self.score.total_hits)
        return max(float(self.score.nmiss), combo_based_miss_count)

    def get_combo_scaling_factor(self) -> float:
        if self.attributes.max_combo <= 0:
            return 1.0

        return min(
            pow(self.score.combo, 0.8) / pow(self.attributes.max_combo, 0.8),
            1.0,
        )

    def length_bonus(self) -> float:
        return (
            0.95
            + 0.4 * min(1.0, self.score.total_hits / 2000.0)
            + (
                math.log10(self.score.total_hits / 2000.0) * 0.5
                if self.score.total_hits > 2000
                else 0.0
            )
        )


class LegacyPerformanceCalculator(PerformanceCalculator):
    """The 2019 ppv2 formula, as used by clients without the newer reworks.

    Flashlight has no component of its own here; it is a bonus on aim.
    """

    def __init__(
        self,
        attributes: DifficultyAttributes,
        score: Score,
        score_version: int = 1,
    ):
        self.attributes = attributes
        self.score = score
        self.score_version = score_version

        self.max_combo = max(1, attributes.max_combo)
        self.n_objects = score.total_hits

    def calculate(self) -> LegacyResult:
        multiplier = 1.12

        if has_mod(self.score.mods, "NF"):
            multiplier *= 0.90

        if has_mod(self.score.mods, "SO"):
            multiplier *= 0.95

        aim_value = self.compute_aim_value()
        speed_value = self.compute_speed_value()
        accuracy_value = self.compute_accuracy_value()

        total_pp = (
            pow(
                pow(aim_value, 1.1) + pow(speed_value, 1.1) + pow(accuracy_value, 1.1),
                1.0 / 1.1,
            )
            * multiplier
        )

        return LegacyResult(
            difficulty=legacy_difficulty(self.attributes),
            pp=total_pp,
            pp_acc=accuracy_value,
            pp_aim=aim_value,
            pp_speed=speed_value,
            pp_flashlight=None,
            effective_miss_count=float(self.score.nmiss),
        )

    def length_bonus(self) -> float:
        return (
            0.95
            + 0.4 * min(1.0, self.n_objects / 2000.0)
            + (
                math.log10(self.n_objects / 2000.0) * 0.5
                if self.n_objects > 2000
                else 0.0
            )
        )

    def combo_break(self) -> float:
        return min(pow(self.score.combo, 0.8) / pow(self.max_combo, 0.8), 1.0)

    def ar_bonus(self) -> float:
        if self.attributes.ar > 10.33:
            return 0.3 * (self.attributes.ar - 10.33)
        elif self.attributes.ar < 8.0:
            return 0.01 * (8.0 - self.attributes.ar)

        return 0.0

    def compute_aim_value(self) -> float:
        aim_value = pp_base(self.attributes.aim)
        aim_value *= self.length_bonus()
        aim_value *= pow(0.97, self.score.nmiss)
        aim_value *= self.combo_break()

        ar_bonus = self.ar_bonus()
        aim_value *= 1.0 + min(ar_bonus, ar_bonus * (self.n_objects / 1000.0))

        if has_mod(self.score.mods, "HD"):
            aim_value *= 1.0 + 0.04 * (12.0 - self.attributes.ar)

        if has_mod(self.score.mods, "FL"):
            fl_bonus = 1.0 + 0.35 * min(1.0, self.n_objects / 200.0)
            if self.n_objects > 200:
                fl_bonus += 0.3 * min(1.0, (self.n_objects - 200) / 300.0)
            if self.n_objects > 500:
                fl_bonus += (self.n_objects - 500) / 1200.0
            aim_value *= fl_bonus

        aim_value *= 0.5 + self.score.acc / 2.0
        aim_value *= 0.98 + pow(self.attributes.od, 2) / 2500.0

        return aim_value

    def compute_speed_value(self) -> float:
        speed_value = pp_base(self.attributes.speed)
        speed_value *= self.length_bonus()
        speed_value *= pow(0.97, self.score.nmiss)
        speed_value *= self.combo_break()

        if self.attributes.ar > 10.33:
            ar_bonus = self.ar_bonus()
            speed_value *= 1.0 + min(ar_bonus, ar_bonus * (self.n_objects / 1000.0))

        if has_mod(self.score.mods, "HD"):
            speed_value *= 1.0 + 0.04 * (12.0 - self.attributes.ar)

        speed_value *= 0.02 + self.score.acc
        speed_value *= 0.96 + pow(self.attributes.od, 2) / 1600.0

        return speed_value

    def compute_accuracy_value(self) -> float:
        if self.score_version == 2:
            # scorev2 judges every object, sliders and spinners included
            circle_count = self.n_objects
            real_acc = self.score.acc
        else:
            circle_count = self.attributes.n_circles
            real_acc = 0.0
            if circle_count > 0:
                real_acc = max(
                    0.0,
                    (
                        (self.score.n300 - (self.n_objects - circle_count)) * 6
                        + self.score.n100 * 2
                        + self.score.n50
                    )
                    / (circle_count * 6),
                )

        acc_value = pow(1.52163, self.attributes.od) * pow(real_acc, 24.0) * 2.83
        acc_value *= min(1.15, pow(circle_count / 1000.0, 0.3))

        if has_mod(self.score.mods, "HD"):
            acc_value *= 1.08

        if has_mod(self.score.mods, "FL"):
            acc_value *= 1.02

        return acc_value


def legacy_difficulty(attributes: DifficultyAttributes) -> LegacyDifficulty:
    return LegacyDifficulty(
        aim_strain=attributes.aim,
        speed_strain=attributes.speed,
        ar=attributes.ar,
        od=attributes.od,
        hp=attributes.hp,
        cs=attributes.cs,
        n_circles=attributes.n_circles,
        n_sliders=attributes.n_sliders,
        n_spinners=attributes.n_spinners,
        stars=attributes.stars,
        max_combo=attributes.max_combo,
    )


def pp_base(stars: float) -> float:
    return pow(5.0 * max(1.0, stars / 0.0675) - 4.0, 3.0) / 100000.0


def acc_calc(n300: int, n100: int, n50: int, misses: int) -> float:
    total = n300 + n100 + n50 + misses

    if total <= 0:
        return 0.0

    return (n50 * 50.0 + n100 * 100.0 + n300 * 300.0) / (total * 300.0)


def acc_round(acc_percent: float, n_objects: int, misses: int) -> tuple[int, int, int]:
    """The 300/100/50 split closest to ``acc_percent``."""
    misses = min(n_objects, misses)
    max300 = n_objects - misses
    max_acc = acc_calc(max300, 0, 0, misses) * 100.0
    acc_percent = clamp(0.0, acc_percent, max_acc)

    n50 = 0
    n100 = int(round(-3.0 * ((acc_percent * 0.01 - 1.0) * n_objects + misses) * 0.5))

    if n100 > max300:
        # lower than all 100s, fill with 50s instead
        n100 = 0
        n50 = int(round(-6.0 * ((acc_percent * 0.01 - 1.0) * n_objects + misses) * 0.5))
        n50 = min(max300, n50)
    else:
        n100 = min(max300, n100)

    n300 = n_objects - n100 - n50 - misses
    return n300, n100, n50


def clamp(minimum, value, maximum):
    return max(minimum, min(value, maximum))
