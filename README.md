# peril

Game logic and messaging helpers for Peril, a multiplayer war game where
players spawn units on the continents, move them around and go to war when
their armies meet. Game events are meant to travel between players over
RabbitMQ.

## Installation

```
pip install .
```

For development, with the test dependencies:

```
pip install -e ".[test]"
pytest
```

## Game rules

- Locations (`peril.gamedata.all_locations()`): `americas`, `europe`,
  `africa`, `asia`, `australia`, `antarctica`.
- Ranks (`peril.gamedata.UnitRank`) and their power, as summed by
  `peril.gamestate.units_to_power_level`: `infantry` (1), `cavalry` (5),
  `artillery` (10).
- A war is fought in a location where both players have units
  (`peril.gamestate.overlapping_location`). The side with the higher total
  power there wins.

## Game state

`peril.gamestate.GameState` holds one player's units and whether the game
is paused. Its methods take a lock, so it may be shared between threads.

```python
from peril.gamestate import GameState

state = GameState("alice")
state.command_spawn(["spawn", "europe", "infantry"])   # unit id 1
state.command_spawn(["spawn", "europe", "artillery"])  # unit id 2
move = state.command_move(["move", "asia", "1"])
state.command_status()
```

- `command_spawn(words)` adds a unit with the next id and returns it.
- `command_move(words)` moves the listed units and returns an `ArmyMove`
  carrying a snapshot of the player. It is refused while the game is paused.
- `command_status()` prints whether the game is paused and, if not, the
  player's units.
- Invalid commands raise `peril.gamedata.GameError` with a message suitable
  for showing to the player.

Incoming events:

- `handle_move(move)` returns a `MoveOutcome`: `SAME_PLAYER` for the
  player's own move, `MAKE_WAR` when the mover has units in a location
  where the player also has units, otherwise `SAFE`.
- `handle_pause(state)` pauses or resumes the game from a
  `peril.routing.PlayingState`.
- `handle_war(recognition)` takes a `RecognitionOfWar` and returns a
  `(WarOutcome, winner, loser)` tuple. Only the attacker's state fights
  the war; the defender gets `NOT_INVOLVED`, as does any other player.
  If the attacker loses, or the war is a draw, the attacker's units in the
  contested location are removed. `NO_UNITS` is returned when the two
  players share no location.

## Messages

`peril.gamedata` defines `Unit`, `Player`, `ArmyMove` and
`RecognitionOfWar`; `peril.routing` defines `PlayingState` and `GameLog`.
Each has `to_dict()` and `from_dict()` for the JSON form sent over the wire.
`peril.routing` also holds the exchange names (`EXCHANGE_PERIL_DIRECT`,
`EXCHANGE_PERIL_TOPIC`) and routing keys (`ARMY_MOVES_PREFIX`,
`WAR_RECOGNITIONS_PREFIX`, `PAUSE_KEY`, `GAME_LOG_SLUG`).

## Messaging

`peril.pubsub` works with a `pika` connection:

- `declare_and_bind(connection, exchange, queue_name, key, queue_type)`
  opens a channel and declares a queue, durable for
  `SimpleQueueType.DURABLE` or auto-deleting and exclusive for
  `SimpleQueueType.TRANSIENT`, binds it to the exchange with the routing
  key, and returns the channel and the queue name. AMQP failures are raised
  as `ConnectionError`.
- `publish_json(channel, exchange, key, value)` publishes a value as JSON
  with content type `application/json`; `encode_json(value)` gives the
  bytes it sends.

## Console helpers

`peril.console` has `print_client_help()`, `print_server_help()`,
`get_input()` (reads a line of words from standard input),
`client_welcome()` (asks for a username, raising `GameError` if none is
given), `get_malicious_log()` and `print_quit()`.

## Game logs

`peril.logs.write_log(game_log, path="game.log", delay=1.0)` waits for
`delay` seconds, then appends a line of the form
`<RFC 3339 time> <username>: <message>` to the file; `format_log_line`
returns that line. File errors are raised as `GameError`.

## What is not included

The package provides the building blocks only. It has no client or server
command to run, no loop that reads commands or dispatches them, and no
helper for subscribing to queues and consuming messages: `AckType` is
defined, but acknowledging deliveries is left to the caller's own `pika`
consumer code.