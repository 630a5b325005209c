from __future__ import annotations

from types import SimpleNamespace

import pytest

from ppcalc.constants.gamemode import GameMode
from ppcalc.mapper import LEGACY_ZERO_FILLED
from ppcalc.mapper import LegacyDifficulty
from ppcalc.mapper import LegacyResult
from ppcalc.mapper import StandardResult
from ppcalc.mapper import map_difficulty
from ppcalc.mapper import map_performance
from ppcalc.models.attributes import Algorithm
from ppcalc.models.attributes import BeatmapAttributes
from ppcalc.models.attributes import DifficultyAttributes


def legacy_result(pp_flashlight=None) -> LegacyResult:
    return LegacyResult(
        difficulty=LegacyDifficulty(
            aim_strain=2.9,
            speed_strain=2.4,
            ar=9.6,
            od=9.0,
            hp=6.0,
            cs=4.2,
            n_circles=300,
            n_sliders=120,
            n_spinners=1,
            stars=5.9,
            max_combo=700,
        ),
        pp=250.0,
        pp_acc=70.0,
        pp_aim=130.0,
        pp_speed=90.0,
        pp_flashlight=pp_flashlight,
        effective_miss_count=1.0,
    )


def test_legacy_result_zero_fills_exactly_the_missing_fields():
    attrs = map_performance(legacy_result(), Algorithm.LEGACY)
    difficulty = attrs.difficulty.model_dump()

    for name in LEGACY_ZERO_FILLED:
        assert difficulty[name] == 0, name

    produced = {
        "aim": 2.9,
        "speed": 2.4,
        "ar": 9.6,
        "od": 9.0,
        "hp": 6.0,
        "cs": 4.2,
        "n_circles": 300,
        "n_sliders": 120,
        "n_spinners": 1,
        "stars": 5.9,
        "max_combo": 700,
    }
    for name, value in produced.items():
        assert difficulty[name] == value, name

    # everything is either produced or zero-filled
    assert set(produced) | set(LEGACY_ZERO_FILLED) | {"mode", "is_convert"} == set(difficulty)

    assert attrs.pp_flashlight == 0
    assert attrs.pp_difficulty == 0
    assert attrs.pp == 250.0
    assert attrs.pp_acc == 70.0
    assert attrs.effective_miss_count == 1.0
    assert attrs.algorithm is Algorithm.LEGACY


def test_legacy_result_keeps_a_computed_flashlight_component():
    attrs = map_performance(legacy_result(pp_flashlight=12.5), Algorithm.RELAX)

    assert attrs.pp_flashlight == 12.5
    assert attrs.algorithm is Algorithm.RELAX


def test_native_none_fields_become_zero():
    native = SimpleNamespace(
        stars=4.1,
        max_combo=900,
        stamina=1.2,
        rhythm=0.8,
        color=1.9,
        aim=None,
        speed=None,
        is_convert=False,
    )
    map_attrs = BeatmapAttributes(
        mode=GameMode.TAIKO, ar=0.0, od=7.0, hp=6.0, cs=0.0, clock_rate=1.0
    )

    attrs = map_difficulty(native, map_attrs)

    assert attrs.mode is GameMode.TAIKO
    assert (attrs.stamina, attrs.rhythm, attrs.color) == (1.2, 0.8, 1.9)
    assert attrs.aim == 0
    assert attrs.speed == 0
    assert attrs.n_circles == 0
    assert attrs.od == 7.0
    assert attrs.native is native


def test_native_performance_is_mapped():
    native = SimpleNamespace(
        difficulty=SimpleNamespace(stars=4.1, max_combo=900, stamina=1.2),
        pp=180.0,
        pp_accuracy=80.0,
        pp_difficulty=110.0,
        pp_aim=None,
        pp_speed=None,
        pp_flashlight=None,
        effective_miss_count=None,
    )
    map_attrs = BeatmapAttributes(
        mode=GameMode.TAIKO, ar=0.0, od=7.0, hp=6.0, cs=0.0, clock_rate=1.0
    )

    attrs = map_performance(StandardResult(native=native, map_attributes=map_attrs), Algorithm.STANDARD)

    assert attrs.pp == 180.0
    assert attrs.pp_acc == 80.0
    assert attrs.pp_difficulty == 110.0
    assert attrs.pp_aim == attrs.pp_speed == attrs.pp_flashlight == 0
    assert attrs.effective_miss_count == 0
    assert attrs.stars == 4.1


def test_dump_leaves_out_the_native_handle():
    native = SimpleNamespace(stars=1.0, max_combo=10)
    map_attrs = BeatmapAttributes(
        mode=GameMode.STANDARD, ar=5.0, od=5.0, hp=5.0, cs=5.0, clock_rate=1.0
    )

    dumped = map_difficulty(native, map_attrs).model_dump()

    assert "native" not in dumped
    assert DifficultyAttributes(**dumped).native is None


def test_unknown_result_shape_is_rejected():
    with pytest.raises(TypeError):
        map_performance(object(), Algorithm.STANDARD)
