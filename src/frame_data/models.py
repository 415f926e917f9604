from dataclasses import dataclass


@dataclass(frozen=True)
class Character:
    name: str
    pretty_name: str
    colour: str


@dataclass(frozen=True)
class Move:
    character: str
    move_name: str
    guard: str = "-"
    damage: str = "-"
    properties: str = "-"
    meter: str = "-"
    on_hit: str = "-"
    on_block: str = "-"
    startup: str = "-"
    active: str = "-"
    recovery: str = "-"
    hitstun: str = "-"
    blockstun: str = "-"
    hitstop: str = ""
    on_pushblock: str = ""
    footer: str = ""
    thumbnail_url: str = "-"
    footer_url: str = "-"


@dataclass(frozen=True)
class SimpleAlias:
    character: str
    alias: str
    move_name: str


@dataclass(frozen=True)
class RegexAlias:
    character: str
    pattern: str
    move_name: str


@dataclass(frozen=True)
class Macro:
    key: str
    value: str

    def expand(self):
        """Return the non-blank alias tokens this macro stands for."""
        return [v.strip() for v in self.value.split("\n") if v.strip()]
