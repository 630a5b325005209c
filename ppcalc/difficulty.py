from __future__ import annotations

import logging
from typing import Any, Optional

import rosu_pp_py as rosu

from ppcalc import settings
from ppcalc.beatmap import Beatmap
from ppcalc.constants.gamemode import GameMode
from ppcalc.errors import AlgorithmValidationError
from ppcalc.errors import ConvertError
from ppcalc.mapper import StandardResult
from ppcalc.mapper import map_difficulty
from ppcalc.models.attributes import BeatmapAttributes
from ppcalc.models.attributes import DifficultyAttributes
from ppcalc.models.attributes import Strains

logger = logging.getLogger(__name__)

STRAIN_SKILLS: tuple[str, ...] = (
    "aim",
    "aim_no_sliders",
    "speed",
    "flashlight",
    "reading",
    "color",
    "rhythm",
    "stamina",
    "single_color_stamina",
    "movement",
    "strains",
)


def _set_options(**options: Any) -> dict[str, Any]:
    return {key: value for key, value in options.items() if value is not None}


class DifficultyEngine:
    """Adapter between the calculator and rosu's difficulty calculation."""

    def __init__(self, strict_conversion: Optional[bool] = None) -> None:
        if strict_conversion is None:
            strict_conversion = settings.STRICT_CONVERSION

        self.strict_conversion = strict_conversion

    def resolve_mode(
        self,
        beatmap: Beatmap,
        mode: Optional[GameMode],
    ) -> tuple[GameMode, bool]:
        """The mode to calculate in, and whether it is a conversion."""
        if mode is None or mode == beatmap.mode:
            return beatmap.mode, False

        if beatmap.mode == GameMode.STANDARD:
            return mode, True

        if self.strict_conversion:
            raise ConvertError(
                f"cannot convert {beatmap.mode.name} beatmap to {mode.name}: "
                "only osu!standard beatmaps can be converted",
                field="mode",
            )

        logger.warning(
            "Ignoring conversion of %s beatmap to %s, using the native mode",
            beatmap.mode.name,
            mode.name,
        )
        return beatmap.mode, False

    def _rosu_map(
        self,
        beatmap: Beatmap,
        mode: Optional[GameMode],
        mods: Optional[int],
    ) -> tuple[rosu.Beatmap, GameMode, bool]:
        mode, converted = self.resolve_mode(beatmap, mode)
        if converted:
            return beatmap.converted(mode, mods), mode, True

        return beatmap.inner, mode, False

    @staticmethod
    def _validate(
        passed_objects: Optional[int],
        clock_rate: Optional[float],
    ) -> None:
        if clock_rate is not None and clock_rate <= 0:
            raise AlgorithmValidationError(
                f"clock_rate must be positive, got {clock_rate}",
                field="clock_rate",
            )

        if passed_objects is not None and passed_objects < 0:
            raise AlgorithmValidationError(
                f"passed_objects must not be negative, got {passed_objects}",
                field="passed_objects",
            )

    def _difficulty_options(
        self,
        beatmap: Beatmap,
        mods: Optional[int],
        passed_objects: Optional[int],
        clock_rate: Optional[float],
        ar: Optional[float],
        lock_cs: bool,
    ) -> dict[str, Any]:
        options = _set_options(
            mods=mods,
            passed_objects=passed_objects,
            clock_rate=clock_rate,
        )
        if ar is not None:
            options.update(ar=ar, ar_with_mods=True)
        if lock_cs:
            options.update(cs=beatmap.cs, cs_with_mods=True)

        return options

    def compute_map_attributes(
        self,
        beatmap: Beatmap,
        mode: Optional[GameMode] = None,
        mods: Optional[int] = None,
        clock_rate: Optional[float] = None,
        ar: Optional[float] = None,
        lock_cs: bool = False,
    ) -> BeatmapAttributes:
        self._validate(None, clock_rate)
        mode, converted = self.resolve_mode(beatmap, mode)

        return beatmap.attributes(
            mode=mode,
            mods=mods,
            clock_rate=clock_rate,
            converted=converted,
            ar=ar,
            cs=beatmap.cs if lock_cs else None,
        )

    def compute_difficulty(
        self,
        beatmap: Beatmap,
        mode: Optional[GameMode] = None,
        mods: Optional[int] = None,
        passed_objects: Optional[int] = None,
        clock_rate: Optional[float] = None,
        ar: Optional[float] = None,
        lock_cs: bool = False,
    ) -> DifficultyAttributes:
        self._validate(passed_objects, clock_rate)
        rosu_map, mode, converted = self._rosu_map(beatmap, mode, mods)

        options = self._difficulty_options(
            beatmap, mods, passed_objects, clock_rate, ar, lock_cs
        )
        logger.debug("Calculating %s difficulty with %r", mode.name, options)
        native = rosu.Difficulty(**options).calculate(rosu_map)

        map_attributes = self.compute_map_attributes(
            beatmap, mode, mods, clock_rate, ar, lock_cs
        )
        return map_difficulty(native, map_attributes)

    def compute_strains(
        self,
        beatmap: Beatmap,
        mode: Optional[GameMode] = None,
        mods: Optional[int] = None,
        passed_objects: Optional[int] = None,
        clock_rate: Optional[float] = None,
    ) -> Strains:
        self._validate(passed_objects, clock_rate)
        rosu_map, mode, _ = self._rosu_map(beatmap, mode, mods)

        options = self._difficulty_options(
            beatmap, mods, passed_objects, clock_rate, None, False
        )
        native = rosu.Difficulty(**options).strains(rosu_map)

        skills = {}
        for name in STRAIN_SKILLS:
            values = getattr(native, name, None)
            if values is not None:
                skills[name] = list(values)

        return Strains(
            mode=mode,
            section_length=native.section_length,
            skills=skills,
        )

    def compute_performance(
        self,
        beatmap: Beatmap,
        mode: Optional[GameMode] = None,
        mods: Optional[int] = None,
        difficulty: Optional[DifficultyAttributes] = None,
        accuracy: Optional[float] = None,
        n_geki: Optional[int] = None,
        n_katu: Optional[int] = None,
        n300: Optional[int] = None,
        n100: Optional[int] = None,
        n50: Optional[int] = None,
        misses: Optional[int] = None,
        combo: Optional[int] = None,
        passed_objects: Optional[int] = None,
        clock_rate: Optional[float] = None,
        ar: Optional[float] = None,
    ) -> StandardResult:
        self._validate(passed_objects, clock_rate)
        rosu_map, mode, _ = self._rosu_map(beatmap, mode, mods)

        options = self._difficulty_options(
            beatmap, mods, passed_objects, clock_rate, ar, False
        )
        options.update(
            _set_options(
                accuracy=accuracy,
                n_geki=n_geki,
                n_katu=n_katu,
                n300=n300,
                n100=n100,
                n50=n50,
                misses=misses,
                combo=combo,
            )
        )
        perf = rosu.Performance(**options)

        if difficulty is not None and difficulty.native is not None:
            logger.debug("Calculating %s performance from precomputed difficulty", mode.name)
            native = perf.calculate(difficulty.native)
        else:
            if difficulty is not None:
                logger.warning(
                    "Precomputed difficulty has no native attributes, recalculating"
                )
            logger.debug("Calculating %s performance with %r", mode.name, options)
            native = perf.calculate(rosu_map)

        map_attributes = self.compute_map_attributes(beatmap, mode, mods, clock_rate, ar)
        return StandardResult(native=native, map_attributes=map_attributes)
