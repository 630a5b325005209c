from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ppcalc.constants.gamemode import GameMode
from ppcalc.constants.mods import Mods
from ppcalc.errors import InvalidEnumValueError
from ppcalc.errors import TypeMismatchError
from ppcalc.errors import UnrecognizedParameterError
from ppcalc.models.attributes import DifficultyAttributes

ACCEPTED_KWARGS: tuple[str, ...] = (
    "mode",
    "mods",
    "n_geki",
    "n_katu",
    "n300",
    "n100",
    "n50",
    "n_misses",
    "acc",
    "accuracy",
    "combo",
    "passed_objects",
    "clock_rate",
    "difficulty",
    "attributes",
    "precomputed_difficulty",
    "ac",
    "arc",
    "hdr",
    "tw",
    "cs",
    "force_legacy",
    "assist_mode",
)


class ParameterSet(BaseModel):
    """Optional scoring inputs, accumulated before a calculation.

    Values are only type-checked when they come from an untyped source
    (:meth:`from_kwargs`); plain attribute assignment stores the value as is.
    Whether a value makes sense (e.g. a negative combo) is up to the
    algorithm that consumes it.
    """

    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    mode: Optional[GameMode] = None
    mods: Optional[int] = None

    n_geki: Optional[int] = None
    n_katu: Optional[int] = None
    n300: Optional[int] = None
    n100: Optional[int] = None
    n50: Optional[int] = None
    n_misses: Optional[int] = None

    combo: Optional[int] = None
    accuracy: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("accuracy", "acc"),
    )

    passed_objects: Optional[int] = None
    clock_rate: Optional[float] = None

    # assist overrides, only consumed by the pipelines that understand them
    ac: Optional[int] = None
    arc: Optional[float] = None
    hdr: Optional[bool] = None
    tw: Optional[int] = None
    cs: Optional[bool] = None

    precomputed_difficulty: Optional[DifficultyAttributes] = Field(
        default=None,
        validation_alias=AliasChoices(
            "precomputed_difficulty",
            "difficulty",
            "attributes",
        ),
    )

    force_legacy: bool = False
    assist_mode: bool = False

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> ParameterSet:
        for key in kwargs:
            if key not in ACCEPTED_KWARGS:
                raise UnrecognizedParameterError(key, ACCEPTED_KWARGS)

        if "mode" in kwargs:
            kwargs["mode"] = parse_mode(kwargs["mode"])

        if isinstance(kwargs.get("mods"), Mods):
            kwargs["mods"] = int(kwargs["mods"])

        try:
            return cls.model_validate(kwargs)
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "?"
            raise TypeMismatchError(
                f"kwarg '{field}': {error['msg'].lower()}",
                field=field,
            ) from exc


def parse_mode(value: Any) -> Optional[GameMode]:
    if value is None or isinstance(value, GameMode):
        return value

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatchError("kwarg 'mode': must be an int", field="mode")

    try:
        return GameMode(value)
    except ValueError:
        raise InvalidEnumValueError(
            f"invalid mode integer: {value}",
            field="mode",
        ) from None
