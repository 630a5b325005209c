from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ppcalc.constants.gamemode import GameMode


class Algorithm(str, Enum):
    """The performance pipeline that produced a result."""

    STANDARD = "standard"
    LEGACY = "legacy"
    RELAX = "relax"


class BeatmapAttributes(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: GameMode
    converted: bool = False

    ar: float
    od: float
    hp: float
    cs: float

    clock_rate: float


class DifficultyAttributes(BaseModel):
    """Difficulty of a beatmap under a given mode, mods and clock rate.

    This is a superset of what every mode produces. Fields a mode (or the
    algorithm that produced the record) does not compute are ``0``: a zero
    here means "not computed", not "negligible", and the two cases cannot be
    told apart from the record alone.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    mode: GameMode
    stars: float
    max_combo: int
    is_convert: bool = False

    ar: float = 0.0
    od: float = 0.0
    hp: float = 0.0
    cs: float = 0.0

    n_circles: int = 0
    n_sliders: int = 0
    n_spinners: int = 0

    # osu!standard
    aim: float = 0.0
    speed: float = 0.0
    flashlight: float = 0.0
    slider_factor: float = 0.0
    speed_note_count: float = 0.0
    aim_difficult_strain_count: float = 0.0
    speed_difficult_strain_count: float = 0.0

    # osu!taiko
    stamina: float = 0.0
    rhythm: float = 0.0
    color: float = 0.0

    # osu!catch
    n_fruits: int = 0
    n_droplets: int = 0
    n_tiny_droplets: int = 0

    # osu!mania
    n_objects: int = 0
    n_hold_notes: int = 0

    # the rosu attributes this record was built from, so it can be fed back
    # into a performance calculation without recomputing difficulty
    native: Optional[Any] = Field(default=None, exclude=True, repr=False)


class PerformanceAttributes(BaseModel):
    """Canonical performance result, whichever algorithm produced it.

    Components the producing algorithm does not compute are ``0``, see
    :class:`DifficultyAttributes`. ``algorithm`` names the producer.
    """

    model_config = ConfigDict(frozen=True)

    difficulty: DifficultyAttributes
    algorithm: Algorithm

    pp: float
    pp_aim: float = 0.0
    pp_speed: float = 0.0
    pp_acc: float = 0.0
    pp_flashlight: float = 0.0
    pp_difficulty: float = 0.0

    effective_miss_count: float = 0.0

    @property
    def stars(self) -> float:
        return self.difficulty.stars


class Strains(BaseModel):
    """Per-section strain values of every skill, ordered by time."""

    model_config = ConfigDict(frozen=True)

    mode: GameMode
    section_length: float
    skills: dict[str, list[float]]

    @property
    def total(self) -> list[float]:
        if not self.skills:
            return []

        length = max(len(values) for values in self.skills.values())
        return [
            sum(values[idx] for values in self.skills.values() if idx < len(values))
            for idx in range(length)
        ]

    def __len__(self) -> int:
        return max((len(values) for values in self.skills.values()), default=0)
