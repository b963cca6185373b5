"""A player's view of the game and the commands and events that change it."""

from __future__ import annotations

import dataclasses
import re
import threading
from collections.abc import Iterable, Sequence
from enum import IntEnum

from peril.gamedata import (
    ArmyMove,
    GameError,
    Location,
    Player,
    RecognitionOfWar,
    Unit,
    UnitRank,
    all_locations,
    all_ranks,
)
from peril.routing import PlayingState

_SEPARATOR = "------------------------"
_INTEGER = re.compile(r"[+-]?[0-9]+")

_POWER = {
    UnitRank.ARTILLERY: 10,
    UnitRank.CAVALRY: 5,
    UnitRank.INFANTRY: 1,
}


class MoveOutcome(IntEnum):
    SAME_PLAYER = 0
    SAFE = 1
    MAKE_WAR = 2


class WarOutcome(IntEnum):
    NOT_INVOLVED = 0
    NO_UNITS = 1
    YOU_WON = 2
    OPPONENT_WON = 3
    DRAW = 4


def overlapping_location(first: Player, second: Player) -> Location | None:
    """Return a location where both players have units, or None."""
    second_locations = {unit.location for unit in second.units.values()}
    return next(
        (unit.location for unit in first.units.values() if unit.location in second_locations),
        None,
    )


def units_to_power_level(units: Iterable[Unit]) -> int:
    """Sum the fighting power of the given units."""
    return sum(_POWER.get(unit.rank, 0) for unit in units)


class GameState:
    """The local player's units and whether the game is paused; safe across threads."""

    def __init__(self, username: str) -> None:
        self._player = Player(username=username, units={})
        self._paused = False
        self._lock = threading.RLock()

    @property
    def username(self) -> str:
        return self._player.username

    def pause(self) -> None:
        with self._lock:
            self._paused = True

    def resume(self) -> None:
        with self._lock:
            self._paused = False

    def is_paused(self) -> bool:
        with self._lock:
            return self._paused

    def add_unit(self, unit: Unit) -> None:
        with self._lock:
            self._player.units[unit.id] = unit

    def update_unit(self, unit: Unit) -> None:
        with self._lock:
            self._player.units[unit.id] = unit

    def remove_units_in_location(self, location: Location) -> None:
        with self._lock:
            self._player.units = {
                key: unit for key, unit in self._player.units.items() if unit.location != location
            }

    def get_unit(self, unit_id: int) -> Unit | None:
        with self._lock:
            return self._player.units.get(unit_id)

    def units_snapshot(self) -> list[Unit]:
        with self._lock:
            return list(self._player.units.values())

    def player_snapshot(self) -> Player:
        with self._lock:
            return Player(username=self._player.username, units=dict(self._player.units))

    def handle_move(self, move: ArmyMove) -> MoveOutcome:
        """React to another player's army move."""
        try:
            player = self.player_snapshot()
            print()
            print("==== Move Detected ====")
            print(
                f"{move.player.username} is moving {len(move.units)} unit(s) "
                f"to {move.to_location}"
            )
            for unit in move.units:
                print(f"* {unit.rank}")

            if player.username == move.player.username:
                return MoveOutcome.SAME_PLAYER

            location = overlapping_location(player, move.player)
            if location is not None:
                print(f"You have units in {location}! You are at war with {move.player.username}!")
                return MoveOutcome.MAKE_WAR
            print(f"You are safe from {move.player.username}'s units.")
            return MoveOutcome.SAFE
        finally:
            print(_SEPARATOR)

    def command_move(self, words: Sequence[str]) -> ArmyMove:
        """Move units: words are ``move <location> <unitID>...``."""
        if self.is_paused():
            raise GameError("the game is paused, you can not move units")
        if len(words) < 3:
            raise GameError("usage: move <location> <unitID> <unitID> <unitID> etc")
        new_location = words[1]
        if new_location not in all_locations():
            raise GameError(f"error: {new_location} is not a valid location")

        unit_ids = []
        for word in words[2:]:
            if not _INTEGER.fullmatch(word):
                raise GameError(f"error: {word} is not a valid unit ID")
            unit_ids.append(int(word))

        moved = []
        for unit_id in unit_ids:
            unit = self.get_unit(unit_id)
            if unit is None:
                raise GameError(f"error: unit with ID {unit_id} not found")
            unit = dataclasses.replace(unit, location=new_location)
            self.update_unit(unit)
            moved.append(unit)

        move = ArmyMove(player=self.player_snapshot(), units=moved, to_location=new_location)
        print(f"Moved {len(move.units)} units to {move.to_location}")
        return move

    def handle_pause(self, state: PlayingState) -> None:
        """Pause or resume the game as the server says."""
        try:
            print()
            if state.is_paused:
                print("==== Pause Detected ====")
                self.pause()
            else:
                print("==== Resume Detected ====")
                self.resume()
        finally:
            print(_SEPARATOR)

    def command_spawn(self, words: Sequence[str]) -> Unit:
        """Spawn a unit: words are ``spawn <location> <rank>``."""
        if len(words) < 3:
            raise GameError("usage: spawn <location> <rank>")
        location = words[1]
        if location not in all_locations():
            raise GameError(f"error: {location} is not a valid location")
        rank_name = words[2]
        rank = next((rank for rank in all_ranks() if rank.value == rank_name), None)
        if rank is None:
            raise GameError(f"error: {rank_name} is not a valid unit")

        with self._lock:
            unit = Unit(id=len(self._player.units) + 1, rank=rank, location=location)
            self._player.units[unit.id] = unit
        print(f"Spawned a(n) {rank_name} in {location} with id {unit.id}")
        return unit

    def handle_war(self, recognition: RecognitionOfWar) -> tuple[WarOutcome, str, str]:
        """Fight a declared war; return the outcome, the winner and the loser."""
        try:
            attacker, defender = recognition.attacker, recognition.defender
            print()
            print("==== War Declared ====")
            print(f"{attacker.username} has declared war on {defender.username}!")

            player = self.player_snapshot()
            if player.username == defender.username:
                print(f"{player.username}, you published the war.")
                return WarOutcome.NOT_INVOLVED, "", ""
            if player.username != attacker.username:
                print(f"{player.username}, you are not involved in this war.")
                return WarOutcome.NOT_INVOLVED, "", ""

            location = overlapping_location(attacker, defender)
            if location is None:
                print("Error! No units are in the same location. No war will be fought.")
                return WarOutcome.NO_UNITS, "", ""

            attacker_units = [u for u in attacker.units.values() if u.location == location]
            defender_units = [u for u in defender.units.values() if u.location == location]
            for side, units in ((attacker, attacker_units), (defender, defender_units)):
                print(f"{side.username}'s units:")
                for unit in units:
                    print(f"  * {unit.rank}")

            attacker_power = units_to_power_level(attacker_units)
            defender_power = units_to_power_level(defender_units)
            print(f"Attacker has a power level of {attacker_power}")
            print(f"Defender has a power level of {defender_power}")

            if attacker_power > defender_power:
                print(f"{attacker.username} has won the war!")
                if player.username == defender.username:
                    self._lose(location)
                    return WarOutcome.OPPONENT_WON, attacker.username, defender.username
                return WarOutcome.YOU_WON, attacker.username, defender.username
            if defender_power > attacker_power:
                print(f"{defender.username} has won the war!")
                if player.username == attacker.username:
                    self._lose(location)
                    return WarOutcome.OPPONENT_WON, defender.username, attacker.username
                return WarOutcome.YOU_WON, defender.username, attacker.username

            print("The war ended in a draw!")
            print(f"Your units in {location} have been killed.")
            self.remove_units_in_location(location)
            return WarOutcome.DRAW, attacker.username, defender.username
        finally:
            print(_SEPARATOR)

    def _lose(self, location: Location) -> None:
        print("You have lost the war!")
        self.remove_units_in_location(location)
        print(f"Your units in {location} have been killed.")

    def command_status(self) -> None:
        """Print whether the game is paused and, if not, the player's units."""
        if self.is_paused():
            print("The game is paused.")
            return
        print("The game is not paused.")
        player = self.player_snapshot()
        print(f"You are {player.username}, and you have {len(player.units)} units.")
        for unit in sorted(player.units.values(), key=lambda u: u.id):
            print(f"* {unit.id}: {unit.location}, {unit.rank}")