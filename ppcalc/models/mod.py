from __future__ import annotations

from pydantic import BaseModel

from ppcalc.constants.mods import Mods


class Mod(BaseModel):
    acronym: str


def convert_mods(mods: int) -> list[Mod]:
    return [Mod(acronym=acronym) for acronym in Mods(mods).acronyms]


def has_mod(mod_list: list[Mod], desired_mod: str) -> bool:
    return any((mod.acronym == desired_mod for mod in mod_list))
