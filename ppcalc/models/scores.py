from __future__ import annotations

from pydantic import BaseModel

from ppcalc.models.mod import Mod


class Score(BaseModel):
    """Play statistics resolved against a beatmap, as consumed by the
    pure-python performance formulas."""

    mods: list[Mod]

    n300: int
    n100: int
    n50: int
    nmiss: int

    combo: int

    @property
    def total_hits(self) -> int:
        return self.n300 + self.n100 + self.n50 + self.nmiss

    @property
    def acc(self) -> float:
        """Accuracy in the 0.0-1.0 range."""
        if self.total_hits <= 0:
            return 0.0

        return (self.n50 * 50.0 + self.n100 * 100.0 + self.n300 * 300.0) / (
            self.total_hits * 300.0
        )
