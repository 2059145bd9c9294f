"""
Parser for the plotter command language.

Only the subset the engine emits is understood: VS, !ST, PU, PD and PG.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from execution.errors import CommandParseError

KNOWN_MNEMONICS = ("!ST", "VS", "PU", "PD", "PG")


@dataclass
class ParsedCommand:
    mnemonic: str
    args: Tuple[int, ...] = ()

    @property
    def position(self) -> Optional[Tuple[int, int]]:
        if self.mnemonic in ("PU", "PD") and len(self.args) == 2:
            return (self.args[0], self.args[1])
        return None


def parse_commands(text: str) -> List[ParsedCommand]:
    """
    Split command text into commands.

    Raises:
        CommandParseError: On unknown mnemonics or non-integer arguments
    """
    commands = []
    for raw in text.split(";"):
        raw = raw.strip()
        if not raw:
            continue

        mnemonic = next((m for m in KNOWN_MNEMONICS if raw.startswith(m)), None)
        if mnemonic is None:
            raise CommandParseError(f"Unknown command: {raw!r}")

        arg_text = raw[len(mnemonic):]
        try:
            args = tuple(int(a) for a in arg_text.split(",")) if arg_text else ()
        except ValueError:
            raise CommandParseError(f"Bad arguments in command: {raw!r}")

        if mnemonic in ("PU", "PD") and len(args) not in (0, 2):
            raise CommandParseError(f"{mnemonic} takes zero or two arguments: {raw!r}")
        if mnemonic == "PG" and args:
            raise CommandParseError(f"PG takes no arguments: {raw!r}")

        commands.append(ParsedCommand(mnemonic, args))
    return commands


def strokes(commands: List[ParsedCommand]) -> List[List[Tuple[int, int]]]:
    """
    Group pen-down travel into polylines.

    A stroke starts at the last pen position when the pen is lowered and
    collects every PD position until the pen is lifted.
    """
    result = []
    current = None
    position = (0, 0)

    for command in commands:
        if command.mnemonic == "PU":
            if current and len(current) > 1:
                result.append(current)
            current = None
            if command.position is not None:
                position = command.position
        elif command.mnemonic == "PD":
            if current is None:
                current = [position]
            if command.position is not None:
                position = command.position
                current.append(position)
        elif command.mnemonic == "PG":
            if current and len(current) > 1:
                result.append(current)
            current = None

    if current and len(current) > 1:
        result.append(current)
    return result
