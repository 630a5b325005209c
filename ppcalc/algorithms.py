"""The performance pipelines the router chooses between.

``StandardPipeline`` hands everything to rosu and works for every mode.
``LegacyPipeline`` and ``RelaxPipeline`` only handle osu!standard: they take
difficulty from the engine and run the pure-python formulas in :mod:`ppcalc.pp`.

Assist overrides:

- ``ac``: hits the client auto-corrected, counted as misses instead of 300s
- ``arc``: approach rate used as is, after mods
- ``hdr``: hidden was removed, so no Hidden bonus is awarded
- ``tw``: playback speed in percent, scales the clock rate
- ``cs``: circle size stays at the beatmap's base value whatever the mods
"""

from __future__ import annotations

import logging
from typing import Optional

from ppcalc.beatmap import Beatmap
from ppcalc.constants.gamemode import GameMode
from ppcalc.constants.mods import Mods
from ppcalc.difficulty import DifficultyEngine
from ppcalc.errors import AlgorithmValidationError
from ppcalc.mapper import LegacyResult
from ppcalc.mapper import StandardResult
from ppcalc.models.attributes import DifficultyAttributes
from ppcalc.models.mod import convert_mods
from ppcalc.models.params import ParameterSet
from ppcalc.models.scores import Score
from ppcalc.pp import LegacyPerformanceCalculator
from ppcalc.pp import PerformanceCalculator
from ppcalc.pp import RelaxPerformanceCalculator
from ppcalc.pp import acc_round

logger = logging.getLogger(__name__)

NON_NEGATIVE_FIELDS: tuple[str, ...] = (
    "n_geki",
    "n_katu",
    "n300",
    "n100",
    "n50",
    "n_misses",
    "combo",
    "passed_objects",
    "ac",
)


def validate_params(params: ParameterSet) -> None:
    for field in NON_NEGATIVE_FIELDS:
        value = getattr(params, field)
        if value is not None and value < 0:
            raise AlgorithmValidationError(
                f"{field} must not be negative, got {value}",
                field=field,
            )

    if params.clock_rate is not None and params.clock_rate <= 0:
        raise AlgorithmValidationError(
            f"clock_rate must be positive, got {params.clock_rate}",
            field="clock_rate",
        )

    if params.accuracy is not None and not 0.0 <= params.accuracy <= 100.0:
        raise AlgorithmValidationError(
            f"accuracy must be within 0-100, got {params.accuracy}",
            field="accuracy",
        )

    if params.tw is not None and params.tw <= 0:
        raise AlgorithmValidationError(
            f"tw must be positive, got {params.tw}",
            field="tw",
        )


def strip_hidden(mods: Optional[int], hdr: Optional[bool]) -> Optional[int]:
    if mods is None or not hdr:
        return mods

    return mods & ~int(Mods.HIDDEN)


def time_warped_clock_rate(mods: int, tw: Optional[int]) -> Optional[float]:
    if tw is None:
        return None

    return Mods(mods).clock_rate * tw / 100.0


class StandardPipeline:
    """General-purpose calculation for whichever mode is in effect."""

    def __init__(self, engine: DifficultyEngine) -> None:
        self.engine = engine

    def calculate(self, beatmap: Beatmap, params: ParameterSet) -> StandardResult:
        validate_params(params)

        n300, misses = params.n300, params.n_misses
        if params.ac:
            if n300 is not None:
                if params.ac > n300:
                    raise AlgorithmValidationError(
                        f"ac ({params.ac}) exceeds n300 ({n300})",
                        field="ac",
                    )
                n300 -= params.ac
            misses = (misses or 0) + params.ac

        return self.engine.compute_performance(
            beatmap,
            mode=params.mode,
            mods=strip_hidden(params.mods, params.hdr),
            difficulty=params.precomputed_difficulty,
            accuracy=params.accuracy,
            n_geki=params.n_geki,
            n_katu=params.n_katu,
            n300=n300,
            n100=params.n100,
            n50=params.n50,
            misses=misses,
            combo=params.combo,
            passed_objects=params.passed_objects,
            clock_rate=params.clock_rate,
            ar=params.arc,
        )


class FormulaPipeline:
    """Base for the osu!standard pipelines backed by a python formula."""

    consumes_assists: bool = False

    def __init__(self, engine: DifficultyEngine) -> None:
        self.engine = engine

    def build_calculator(
        self,
        attributes: DifficultyAttributes,
        score: Score,
        mods: int,
    ) -> PerformanceCalculator:
        raise NotImplementedError

    def calculate(self, beatmap: Beatmap, params: ParameterSet) -> LegacyResult:
        validate_params(params)

        mods = params.mods or 0
        clock_rate = None
        ar = None
        lock_cs = False

        if self.consumes_assists:
            mods = strip_hidden(mods, params.hdr)
            clock_rate = time_warped_clock_rate(mods, params.tw)
            ar = params.arc
            lock_cs = bool(params.cs)

        attributes = self.engine.compute_difficulty(
            beatmap,
            mode=GameMode.STANDARD,
            mods=mods,
            passed_objects=params.passed_objects,
            clock_rate=clock_rate,
            ar=ar,
            lock_cs=lock_cs,
        )
        score = self.resolve_score(params, attributes, mods)

        logger.debug(
            "Running %s on %d/%d/%d/%d x%d",
            type(self).__name__,
            score.n300,
            score.n100,
            score.n50,
            score.nmiss,
            score.combo,
        )
        return self.build_calculator(attributes, score, mods).calculate()

    def resolve_score(
        self,
        params: ParameterSet,
        attributes: DifficultyAttributes,
        mods: int,
    ) -> Score:
        """Hit counts and combo, filling in whatever was not given.

        Explicit hit counts win over accuracy; without either every
        remaining object counts as a 300.
        """
        n_objects = attributes.n_circles + attributes.n_sliders + attributes.n_spinners
        if params.passed_objects is not None:
            n_objects = min(n_objects, params.passed_objects)

        nmiss = params.n_misses or 0
        n300, n100, n50 = params.n300, params.n100, params.n50

        if n300 is None and n100 is None and n50 is None and params.accuracy is not None:
            n300, n100, n50 = acc_round(params.accuracy, n_objects, nmiss)
        else:
            n100 = n100 or 0
            n50 = n50 or 0
            if n300 is None:
                n300 = max(0, n_objects - n100 - n50 - nmiss)

        if self.consumes_assists and params.ac:
            if params.ac > n300:
                raise AlgorithmValidationError(
                    f"ac ({params.ac}) exceeds n300 ({n300})",
                    field="ac",
                )
            n300 -= params.ac
            nmiss += params.ac

        if n300 + n100 + n50 + nmiss > n_objects:
            raise AlgorithmValidationError(
                f"{n300 + n100 + n50 + nmiss} hits exceed the {n_objects} objects "
                "of the beatmap",
            )

        combo = params.combo
        if combo is None:
            combo = max(0, attributes.max_combo - nmiss)
        elif combo > attributes.max_combo:
            raise AlgorithmValidationError(
                f"combo ({combo}) exceeds the max combo ({attributes.max_combo})",
                field="combo",
            )

        return Score(
            mods=convert_mods(mods),
            n300=n300,
            n100=n100,
            n50=n50,
            nmiss=nmiss,
            combo=combo,
        )


class LegacyPipeline(FormulaPipeline):
    """2019 ppv2, for scores set on clients that still use it."""

    def build_calculator(
        self,
        attributes: DifficultyAttributes,
        score: Score,
        mods: int,
    ) -> PerformanceCalculator:
        score_version = 2 if Mods(mods).has_score_v2() else 1
        return LegacyPerformanceCalculator(attributes, score, score_version)


class RelaxPipeline(FormulaPipeline):
    """Relax and assist plays, the only pipeline to honour every assist field."""

    consumes_assists = True

    def build_calculator(
        self,
        attributes: DifficultyAttributes,
        score: Score,
        mods: int,
    ) -> PerformanceCalculator:
        return RelaxPerformanceCalculator(attributes, score)
