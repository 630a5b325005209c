from __future__ import annotations

import pytest

from ppcalc.constants.mods import Mods
from ppcalc.models.mod import convert_mods
from ppcalc.models.mod import has_mod


def test_predicates():
    assert Mods(1 << 29).has_score_v2()
    assert not Mods(1 << 29).has_relax()
    assert Mods(128).has_relax()
    assert not Mods(0).has_score_v2()
    assert (Mods.RELAX | Mods.SCOREV2 | Mods.HIDDEN).has_relax()


@pytest.mark.parametrize(
    "mods, expected",
    [
        (Mods.NOMOD, 1.0),
        (Mods.DOUBLETIME, 1.5),
        (Mods.NIGHTCORE | Mods.DOUBLETIME, 1.5),
        (Mods.HALFTIME | Mods.HIDDEN, 0.75),
        (Mods.HARDROCK, 1.0),
    ],
)
def test_clock_rate(mods, expected):
    assert mods.clock_rate == expected


def test_acronyms():
    assert repr(Mods.HIDDEN | Mods.DOUBLETIME) == "HDDT"
    assert repr(Mods.NOMOD) == "NM"
    assert (Mods.NIGHTCORE | Mods.DOUBLETIME).acronyms == ["NC"]
    assert (Mods.PERFECT | Mods.SUDDENDEATH).acronyms == ["PF"]


def test_convert_mods():
    mods = convert_mods(int(Mods.HIDDEN | Mods.RELAX | Mods.FLASHLIGHT))

    assert [mod.acronym for mod in mods] == ["HD", "RX", "FL"]
    assert has_mod(mods, "RX")
    assert not has_mod(mods, "DT")
