from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import rosu_pp_py as rosu

from ppcalc.constants.gamemode import GameMode
from ppcalc.errors import BeatmapError
from ppcalc.errors import ConvertError
from ppcalc.models.attributes import BeatmapAttributes

logger = logging.getLogger(__name__)


class Beatmap:
    """A parsed ``.osu`` beatmap.

    The wrapped rosu beatmap is never mutated. Conversions to another mode
    are done on a fresh copy parsed from the raw bytes kept here, so a single
    instance can be shared between calculators and threads.
    """

    def __init__(
        self,
        *,
        path: Optional[Union[str, Path]] = None,
        content: Optional[Union[str, bytes]] = None,
        bytes: Optional[bytes] = None,
    ) -> None:
        sources = [source for source in (path, content, bytes) if source is not None]
        if len(sources) != 1:
            raise BeatmapError("exactly one of 'path', 'content' or 'bytes' is required")

        if path is not None:
            try:
                raw = Path(path).read_bytes()
            except OSError as exc:
                raise BeatmapError(f"failed to read beatmap {path}: {exc}") from exc
        elif content is not None:
            raw = content.encode() if isinstance(content, str) else content
        else:
            raw = bytes

        self._raw: bytes = raw
        self.inner = self._parse(raw)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Beatmap:
        return cls(path=path)

    @staticmethod
    def _parse(raw: bytes) -> rosu.Beatmap:
        try:
            return rosu.Beatmap(bytes=raw)
        except Exception as exc:
            raise BeatmapError(f"failed to parse beatmap: {exc}") from exc

    @property
    def mode(self) -> GameMode:
        return GameMode.from_rosu(self.inner.mode)

    @property
    def ar(self) -> float:
        return self.inner.ar

    @property
    def od(self) -> float:
        return self.inner.od

    @property
    def hp(self) -> float:
        return self.inner.hp

    @property
    def cs(self) -> float:
        return self.inner.cs

    @property
    def n_objects(self) -> int:
        return self.inner.n_objects

    def converted(self, mode: GameMode, mods: Optional[int] = None) -> rosu.Beatmap:
        """A fresh rosu beatmap converted to ``mode``."""
        if mode == self.mode:
            return self.inner

        copy = self._parse(self._raw)
        try:
            if mods is not None:
                copy.convert(mode.to_rosu(), mods)
            else:
                copy.convert(mode.to_rosu())
        except rosu.ConvertError as exc:
            raise ConvertError(
                f"cannot convert {self.mode.name} beatmap to {mode.name}: {exc}",
                field="mode",
            ) from exc

        return copy

    def attributes(
        self,
        mode: Optional[GameMode] = None,
        mods: Optional[int] = None,
        clock_rate: Optional[float] = None,
        converted: bool = False,
        ar: Optional[float] = None,
        cs: Optional[float] = None,
    ) -> BeatmapAttributes:
        """Physical map attributes (AR, OD, HP, CS) after mods and clock rate.

        ``ar`` and ``cs`` replace the mod-adjusted values as they are.
        """
        kwargs = {"map": self.inner}
        if mode is not None:
            kwargs["mode"] = mode.to_rosu()
            kwargs["is_convert"] = converted
        if mods is not None:
            kwargs["mods"] = mods
        if clock_rate is not None:
            kwargs["clock_rate"] = clock_rate
        if ar is not None:
            kwargs["ar"] = ar
            kwargs["ar_with_mods"] = True
        if cs is not None:
            kwargs["cs"] = cs
            kwargs["cs_with_mods"] = True

        attrs = rosu.BeatmapAttributesBuilder(**kwargs).build()

        return BeatmapAttributes(
            mode=mode if mode is not None else self.mode,
            converted=converted,
            ar=attrs.ar,
            od=attrs.od,
            hp=attrs.hp,
            cs=attrs.cs,
            clock_rate=attrs.clock_rate,
        )

    def __repr__(self) -> str:
        return f"<Beatmap mode={self.mode.name} objects={self.n_objects}>"
