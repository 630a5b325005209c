from __future__ import annotations

import logging

from ppcalc import settings
from ppcalc.beatmap import Beatmap
from ppcalc.calculator import Calculator
from ppcalc.constants.gamemode import GameMode
from ppcalc.constants.mods import Mods
from ppcalc.difficulty import DifficultyEngine
from ppcalc.errors import AlgorithmValidationError
from ppcalc.errors import BeatmapError
from ppcalc.errors import CalculatorError
from ppcalc.errors import ConvertError
from ppcalc.errors import InvalidEnumValueError
from ppcalc.errors import TypeMismatchError
from ppcalc.errors import UnrecognizedParameterError
from ppcalc.models.attributes import Algorithm
from ppcalc.models.attributes import BeatmapAttributes
from ppcalc.models.attributes import DifficultyAttributes
from ppcalc.models.attributes import PerformanceAttributes
from ppcalc.models.attributes import Strains
from ppcalc.models.params import ParameterSet

logger = logging.getLogger(__name__)
logger.setLevel(settings.LOG_LEVEL.upper())
logger.addHandler(logging.NullHandler())

__all__ = (
    "Algorithm",
    "AlgorithmValidationError",
    "Beatmap",
    "BeatmapAttributes",
    "BeatmapError",
    "Calculator",
    "CalculatorError",
    "ConvertError",
    "DifficultyAttributes",
    "DifficultyEngine",
    "GameMode",
    "InvalidEnumValueError",
    "Mods",
    "ParameterSet",
    "PerformanceAttributes",
    "Strains",
    "TypeMismatchError",
    "UnrecognizedParameterError",
)
