from __future__ import annotations

import logging
from typing import Any, Optional, Union

from ppcalc.algorithms import LegacyPipeline
from ppcalc.algorithms import RelaxPipeline
from ppcalc.algorithms import StandardPipeline
from ppcalc.beatmap import Beatmap
from ppcalc.constants.gamemode import GameMode
from ppcalc.difficulty import DifficultyEngine
from ppcalc.mapper import map_performance
from ppcalc.models.attributes import Algorithm
from ppcalc.models.attributes import BeatmapAttributes
from ppcalc.models.attributes import DifficultyAttributes
from ppcalc.models.attributes import PerformanceAttributes
from ppcalc.models.attributes import Strains
from ppcalc.models.params import ParameterSet
from ppcalc.models.params import parse_mode
from ppcalc.router import select_algorithm

logger = logging.getLogger(__name__)

PIPELINES = {
    Algorithm.STANDARD: StandardPipeline,
    Algorithm.LEGACY: LegacyPipeline,
    Algorithm.RELAX: RelaxPipeline,
}


class Calculator:
    """Collects score parameters and calculates difficulty and performance.

    Parameters are given as keyword arguments or through the ``set_*``
    methods; setting one twice keeps the last value. A calculator is not
    consumed by a calculation and can be reused, but it is not meant to be
    mutated from several threads at once.

    Example::

        calc = Calculator(mods=Mods.HIDDEN, n300=500, n100=10, combo=1000)
        calc.set_n_misses(1)
        attrs = calc.performance(Beatmap.from_path("map.osu"))
    """

    def __init__(
        self,
        *,
        engine: Optional[DifficultyEngine] = None,
        **kwargs: Any,
    ) -> None:
        self.params = ParameterSet.from_kwargs(**kwargs)
        self.engine = engine or DifficultyEngine()

    def set_mode(self, mode: Union[GameMode, int]) -> None:
        self.params.mode = parse_mode(mode)

    def set_mods(self, mods: int) -> None:
        self.params.mods = mods

    def set_acc(self, acc: float) -> None:
        self.params.accuracy = acc

    def set_n_geki(self, n_geki: int) -> None:
        self.params.n_geki = n_geki

    def set_n_katu(self, n_katu: int) -> None:
        self.params.n_katu = n_katu

    def set_n300(self, n300: int) -> None:
        self.params.n300 = n300

    def set_n100(self, n100: int) -> None:
        self.params.n100 = n100

    def set_n50(self, n50: int) -> None:
        self.params.n50 = n50

    def set_n_misses(self, n_misses: int) -> None:
        self.params.n_misses = n_misses

    def set_combo(self, combo: int) -> None:
        self.params.combo = combo

    def set_passed_objects(self, passed_objects: int) -> None:
        self.params.passed_objects = passed_objects

    def set_clock_rate(self, clock_rate: float) -> None:
        self.params.clock_rate = clock_rate

    def set_difficulty(self, difficulty: DifficultyAttributes) -> None:
        self.params.precomputed_difficulty = difficulty

    def set_ac(self, ac: int) -> None:
        self.params.ac = ac

    def set_arc(self, arc: float) -> None:
        self.params.arc = arc

    def set_hdr(self, hdr: bool) -> None:
        self.params.hdr = hdr

    def set_tw(self, tw: int) -> None:
        self.params.tw = tw

    def set_cs(self, cs: bool) -> None:
        self.params.cs = cs

    def set_force_legacy(self, force_legacy: bool) -> None:
        self.params.force_legacy = force_legacy

    def set_assist_mode(self, assist_mode: bool) -> None:
        self.params.assist_mode = assist_mode

    def map_attributes(self, beatmap: Beatmap) -> BeatmapAttributes:
        return self.engine.compute_map_attributes(
            beatmap,
            mode=self.params.mode,
            mods=self.params.mods,
            clock_rate=self.params.clock_rate,
        )

    def difficulty(self, beatmap: Beatmap) -> DifficultyAttributes:
        return self.engine.compute_difficulty(
            beatmap,
            mode=self.params.mode,
            mods=self.params.mods,
            passed_objects=self.params.passed_objects,
            clock_rate=self.params.clock_rate,
        )

    def strains(self, beatmap: Beatmap) -> Strains:
        return self.engine.compute_strains(
            beatmap,
            mode=self.params.mode,
            mods=self.params.mods,
            passed_objects=self.params.passed_objects,
            clock_rate=self.params.clock_rate,
        )

    def performance(self, beatmap: Beatmap) -> PerformanceAttributes:
        algorithm = select_algorithm(self.params, beatmap)
        logger.debug("Selected the %s pipeline", algorithm.value)

        pipeline = PIPELINES[algorithm](self.engine)
        result = pipeline.calculate(beatmap, self.params)

        return map_performance(result, algorithm)
