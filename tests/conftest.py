from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Optional

import pytest

from ppcalc.constants.gamemode import GameMode
from ppcalc.mapper import StandardResult
from ppcalc.models.attributes import BeatmapAttributes
from ppcalc.models.attributes import DifficultyAttributes

DATA_DIR = Path(__file__).parent / "data"


class FakeEngine:
    """Stands in for the rosu-backed engine and records every call."""

    def __init__(self, difficulty: DifficultyAttributes) -> None:
        self.difficulty = difficulty
        self.calls: list[tuple[str, dict]] = []

    def compute_difficulty(self, beatmap, **kwargs) -> DifficultyAttributes:
        self.calls.append(("difficulty", kwargs))
        return self.difficulty

    def compute_strains(self, beatmap, **kwargs):
        self.calls.append(("strains", kwargs))
        return SimpleNamespace(skills={"aim": [1.0, 2.0]})

    def compute_map_attributes(self, beatmap, **kwargs) -> BeatmapAttributes:
        self.calls.append(("map_attributes", kwargs))
        return map_attributes(kwargs.get("mode") or beatmap.mode)

    def compute_performance(self, beatmap, **kwargs) -> StandardResult:
        self.calls.append(("performance", kwargs))
        mode = kwargs.get("mode") or beatmap.mode
        native = SimpleNamespace(
            difficulty=SimpleNamespace(
                stars=self.difficulty.stars,
                max_combo=self.difficulty.max_combo,
                aim=self.difficulty.aim,
                speed=self.difficulty.speed,
                n_circles=self.difficulty.n_circles,
            ),
            pp=321.5,
            pp_aim=150.0,
            pp_speed=120.0,
            pp_accuracy=60.0,
            pp_flashlight=0.0,
            pp_difficulty=None,
            effective_miss_count=0.0 if not kwargs.get("misses") else float(kwargs["misses"]),
        )
        return StandardResult(native=native, map_attributes=map_attributes(mode))

    def called(self, name: str) -> list[dict]:
        return [kwargs for call, kwargs in self.calls if call == name]


def map_attributes(mode: GameMode) -> BeatmapAttributes:
    return BeatmapAttributes(mode=mode, ar=9.3, od=8.5, hp=5.0, cs=4.0, clock_rate=1.0)


def standard_difficulty(**overrides) -> DifficultyAttributes:
    values = dict(
        mode=GameMode.STANDARD,
        stars=5.6,
        max_combo=1100,
        ar=9.3,
        od=8.5,
        hp=5.0,
        cs=4.0,
        n_circles=400,
        n_sliders=200,
        n_spinners=2,
        aim=2.85,
        speed=2.55,
        flashlight=2.1,
        slider_factor=0.98,
        speed_note_count=310.0,
    )
    values.update(overrides)
    return DifficultyAttributes(**values)


def fake_beatmap(mode: GameMode = GameMode.STANDARD, cs: Optional[float] = 4.0):
    return SimpleNamespace(mode=mode, cs=cs)


@pytest.fixture
def difficulty() -> DifficultyAttributes:
    return standard_difficulty()


@pytest.fixture
def engine(difficulty: DifficultyAttributes) -> FakeEngine:
    return FakeEngine(difficulty)


@pytest.fixture
def std_map():
    return fake_beatmap(GameMode.STANDARD)


@pytest.fixture
def taiko_map():
    return fake_beatmap(GameMode.TAIKO)
