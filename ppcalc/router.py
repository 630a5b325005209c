from __future__ import annotations

from typing import Any

from ppcalc.constants.gamemode import GameMode
from ppcalc.constants.mods import Mods
from ppcalc.models.attributes import Algorithm
from ppcalc.models.params import ParameterSet


def is_standard_context(params: ParameterSet, beatmap: Any) -> bool:
    """Whether the calculation happens in osu!standard.

    An unset mode means the beatmap's own mode is used.
    """
    if params.mode is None:
        return beatmap.mode == GameMode.STANDARD

    return params.mode == GameMode.STANDARD


def select_algorithm(params: ParameterSet, beatmap: Any) -> Algorithm:
    """Choose the performance pipeline for a score.

    The legacy pipeline wins over the relax one, and both are restricted to
    osu!standard: the mode check applies to the mod bit and to the flag
    alike, so a ScoreV2 or Relax score in any other mode always gets the
    standard pipeline.
    """
    mods = Mods(params.mods or 0)
    standard = is_standard_context(params, beatmap)

    if (mods.has_score_v2() or params.force_legacy) and standard:
        return Algorithm.LEGACY

    if (mods.has_relax() or params.assist_mode) and standard:
        return Algorithm.RELAX

    return Algorithm.STANDARD
