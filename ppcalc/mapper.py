"""Normalisation of algorithm-specific results into the canonical records.

The rosu back-end leaves fields it does not compute for a mode as ``None``;
the pure-python formulas return a narrower record altogether. Either way the
missing fields end up as ``0`` in the canonical record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ppcalc.constants.gamemode import GameMode
from ppcalc.models.attributes import Algorithm
from ppcalc.models.attributes import BeatmapAttributes
from ppcalc.models.attributes import DifficultyAttributes
from ppcalc.models.attributes import PerformanceAttributes

# fields copied from rosu difficulty attributes when present
NATIVE_DIFFICULTY_FIELDS: tuple[str, ...] = (
    "n_circles",
    "n_sliders",
    "n_spinners",
    "aim",
    "speed",
    "flashlight",
    "slider_factor",
    "speed_note_count",
    "aim_difficult_strain_count",
    "speed_difficult_strain_count",
    "stamina",
    "rhythm",
    "color",
    "n_fruits",
    "n_droplets",
    "n_tiny_droplets",
    "n_objects",
    "n_hold_notes",
)

# fields the legacy formulas never produce
LEGACY_ZERO_FILLED: tuple[str, ...] = (
    "flashlight",
    "slider_factor",
    "speed_note_count",
    "aim_difficult_strain_count",
    "speed_difficult_strain_count",
    "stamina",
    "rhythm",
    "color",
    "n_fruits",
    "n_droplets",
    "n_tiny_droplets",
    "n_objects",
    "n_hold_notes",
)


@dataclass
class LegacyDifficulty:
    aim_strain: float
    speed_strain: float

    ar: float
    od: float
    hp: float
    cs: float

    n_circles: int
    n_sliders: int
    n_spinners: int

    stars: float
    max_combo: int


@dataclass
class LegacyResult:
    """Output of the pure-python (legacy and relax) formulas."""

    difficulty: LegacyDifficulty

    pp: float
    pp_acc: float
    pp_aim: float
    pp_speed: float
    # the 2019 legacy formula folds flashlight into aim
    pp_flashlight: Optional[float]

    effective_miss_count: float


@dataclass
class StandardResult:
    """Output of the rosu performance calculation."""

    native: Any
    map_attributes: BeatmapAttributes


def _number(value: Any) -> Union[int, float]:
    return 0 if value is None else value


def map_difficulty(
    native: Any,
    map_attributes: BeatmapAttributes,
) -> DifficultyAttributes:
    fields = {
        name: _number(getattr(native, name, None)) for name in NATIVE_DIFFICULTY_FIELDS
    }

    return DifficultyAttributes(
        mode=map_attributes.mode,
        stars=native.stars,
        max_combo=native.max_combo,
        is_convert=bool(getattr(native, "is_convert", map_attributes.converted)),
        ar=map_attributes.ar,
        od=map_attributes.od,
        hp=map_attributes.hp,
        cs=map_attributes.cs,
        native=native,
        **fields,
    )


def map_legacy_difficulty(difficulty: LegacyDifficulty) -> DifficultyAttributes:
    return DifficultyAttributes(
        mode=GameMode.STANDARD,
        stars=difficulty.stars,
        max_combo=difficulty.max_combo,
        ar=difficulty.ar,
        od=difficulty.od,
        hp=difficulty.hp,
        cs=difficulty.cs,
        n_circles=difficulty.n_circles,
        n_sliders=difficulty.n_sliders,
        n_spinners=difficulty.n_spinners,
        aim=difficulty.aim_strain,
        speed=difficulty.speed_strain,
        **{name: 0 for name in LEGACY_ZERO_FILLED},
    )


def map_performance(
    result: Union[StandardResult, LegacyResult],
    algorithm: Algorithm,
) -> PerformanceAttributes:
    if isinstance(result, LegacyResult):
        return PerformanceAttributes(
            difficulty=map_legacy_difficulty(result.difficulty),
            algorithm=algorithm,
            pp=result.pp,
            pp_aim=result.pp_aim,
            pp_speed=result.pp_speed,
            pp_acc=result.pp_acc,
            pp_flashlight=_number(result.pp_flashlight),
            pp_difficulty=0.0,
            effective_miss_count=result.effective_miss_count,
        )
    elif isinstance(result, StandardResult):
        native = result.native
        return PerformanceAttributes(
            difficulty=map_difficulty(native.difficulty, result.map_attributes),
            algorithm=algorithm,
            pp=native.pp,
            pp_aim=_number(getattr(native, "pp_aim", None)),
            pp_speed=_number(getattr(native, "pp_speed", None)),
            pp_acc=_number(getattr(native, "pp_accuracy", None)),
            pp_flashlight=_number(getattr(native, "pp_flashlight", None)),
            pp_difficulty=_number(getattr(native, "pp_difficulty", None)),
            effective_miss_count=_number(getattr(native, "effective_miss_count", None)),
        )
    else:
        raise TypeError(f"Unsupported result type: {type(result).__name__}")
