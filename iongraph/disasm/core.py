"""Core data structures for the iongraph disassembler."""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any


class IonGraphError(Exception):
    """Base class for every failure reported by the command line."""


class IonIOError(IonGraphError, OSError):
    """A file could not be read or written."""


class IonParseError(IonGraphError, ValueError):
    """The input file is not well-formed JSON."""


class MissingFieldError(IonGraphError, ValueError):
    """A required field is absent or has the wrong type."""

    def __init__(self, path: str, expected: str):
        self.path = path
        self.expected = expected
        super().__init__(f"{path}: expected {expected}")


def render_json(value: Any) -> str:
    """Render a JSON scalar the way the compiler log prints values."""

    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def render_name(value: Any) -> str:
    """Show strings bare and anything else as JSON."""

    if isinstance(value, str):
        return value
    return render_json(value)


@dataclass(frozen=True)
class Instruction:
    id: int
    opcode: str
    type: Any = None

    @property
    def mnemonic(self) -> str:
        return self.opcode.partition(" ")[0]

    @property
    def operand(self) -> str:
        return self.opcode.partition(" ")[2]


@dataclass(frozen=True)
class Block:
    number: Any
    instructions: tuple[Instruction, ...]
    successors: tuple[Any, ...]


@dataclass(frozen=True)
class Pass:
    """One optimization phase; only the MIR blocks are kept."""

    name: Any
    blocks: tuple[Block, ...]


@dataclass(frozen=True)
class Function:
    name: Any
    passes: tuple[Pass, ...]


@dataclass(frozen=True)
class Document:
    functions: tuple[Function, ...]


__all__ = [
    "IonGraphError",
    "IonIOError",
    "IonParseError",
    "MissingFieldError",
    "render_json",
    "render_name",
    "Instruction",
    "Block",
    "Pass",
    "Function",
    "Document",
]
