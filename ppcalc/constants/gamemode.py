from __future__ import annotations

from enum import IntEnum

import rosu_pp_py as rosu


class GameMode(IntEnum):
    STANDARD = 0
    TAIKO = 1
    CATCH = 2
    MANIA = 3

    def to_rosu(self) -> rosu.GameMode:
        return {
            GameMode.STANDARD: rosu.GameMode.Osu,
            GameMode.TAIKO: rosu.GameMode.Taiko,
            GameMode.CATCH: rosu.GameMode.Catch,
            GameMode.MANIA: rosu.GameMode.Mania,
        }[self]

    @classmethod
    def from_rosu(cls, mode: rosu.GameMode) -> GameMode:
        # rosu's enum discriminants line up with the osu! mode ids
        return cls(int(mode))
