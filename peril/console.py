"""Console prompts and messages for the client and server."""

from __future__ import annotations

import random
import sys
from collections.abc import Iterable

from peril.gamedata import GameError

MALICIOUS_LOGS = (
    "Never interrupt your enemy when he is making a mistake.",
    "The hardest thing of all for a soldier is to retreat.",
    "A soldier will fight long and hard for a bit of colored ribbon.",
    "It is well that war is so terrible, otherwise we should grow too fond of it.",
    "The art of war is simple enough. Find out where your enemy is. Get at him as soon "
    "as you can. Strike him as hard as you can, and keep moving on.",
    "All warfare is based on deception.",
)

QUIT_MESSAGE = "I hate this game! (╯°□°)╯︵ ┻━┻"

_CLIENT_HELP = (
    "Possible commands:",
    "* move <location> <unitID> <unitID> <unitID>...",
    "    example:",
    "    move asia 1",
    "* spawn <location> <rank>",
    "    example:",
    "    spawn europe infantry",
    "* status",
    "* spam <n>",
    "    example:",
    "    spam 5",
    "* quit",
    "* help",
)

_SERVER_HELP = (
    "Possible commands:",
    "* pause",
    "* resume",
    "* quit",
    "* help",
)


def _emit(lines: Iterable[str]) -> str:
    """Write each line to standard output and return the text written."""
    text = "".join(f"{line}\n" for line in lines)
    sys.stdout.write(text)
    sys.stdout.flush()
    return text


def print_client_help() -> str:
    """Show the commands available to a client and return the text shown."""
    return _emit(_CLIENT_HELP)


def print_server_help() -> str:
    """Show the commands available to the server and return the text shown."""
    return _emit(_SERVER_HELP)


def get_input() -> list[str]:
    """Prompt and read one line of words from standard input; empty at end of input."""
    print("> ", end="", flush=True)
    return sys.stdin.readline().split()


def client_welcome() -> str:
    """Greet the player and ask for a username."""
    print("Welcome to the Peril client!")
    print("Please enter your username:")
    words = get_input()
    if not words:
        raise GameError("you must enter a username. goodbye")
    print(f"Welcome, {words[0]}!")
    print_client_help()
    return words[0]


def get_malicious_log() -> str:
    """Pick one of the malicious log messages at random."""
    return random.choice(MALICIOUS_LOGS)


def print_quit() -> str:
    """Show the farewell message of a player who gives up and return the text shown."""
    return _emit((QUIT_MESSAGE,))