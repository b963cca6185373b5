"""Core game data: ranks, locations, units, players and messages about them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

Location = str


class GameError(Exception):
    """A command or game action could not be carried out."""


class UnitRank(str, Enum):
    INFANTRY = "infantry"
    CAVALRY = "cavalry"
    ARTILLERY = "artillery"

    def __str__(self) -> str:
        return self.value


def all_ranks() -> frozenset[UnitRank]:
    """Every rank a unit may have."""
    return frozenset(UnitRank)


def all_locations() -> frozenset[Location]:
    """Every location on the map."""
    return frozenset({"americas", "europe", "africa", "asia", "australia", "antarctica"})


@dataclass(frozen=True)
class Unit:
    id: int
    rank: UnitRank
    location: Location

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "Rank": self.rank.value, "Location": self.location}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Unit:
        return cls(int(data["ID"]), UnitRank(data["Rank"]), data["Location"])


@dataclass
class Player:
    username: str
    units: dict[int, Unit] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        ordered = sorted(self.units.items(), key=lambda item: str(item[0]))
        return {"Username": self.username, "Units": {str(k): u.to_dict() for k, u in ordered}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        units = data.get("Units") or {}
        return cls(data.get("Username", ""), {int(k): Unit.from_dict(v) for k, v in units.items()})


@dataclass
class ArmyMove:
    player: Player
    units: list[Unit]
    to_location: Location

    def to_dict(self) -> dict[str, Any]:
        return {
            "Player": self.player.to_dict(),
            "Units": [unit.to_dict() for unit in self.units],
            "ToLocation": self.to_location,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArmyMove:
        return cls(
            Player.from_dict(data.get("Player") or {}),
            [Unit.from_dict(unit) for unit in data.get("Units") or []],
            data.get("ToLocation", ""),
        )


@dataclass
class RecognitionOfWar:
    attacker: Player
    defender: Player

    def to_dict(self) -> dict[str, Any]:
        return {"Attacker": self.attacker.to_dict(), "Defender": self.defender.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RecognitionOfWar:
        return cls(
            Player.from_dict(data.get("Attacker") or {}),
            Player.from_dict(data.get("Defender") or {}),
        )