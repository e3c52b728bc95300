"""Loading, decoding and writing of Ion compiler logs."""

from __future__ import annotations

import json
import os
from pathlib import Path
import stat
import tempfile
from typing import Any

from .core import (
    Block,
    Document,
    Function,
    Instruction,
    IonIOError,
    IonParseError,
    MissingFieldError,
    Pass,
)


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def _check_strings(value):
    """Reject lone UTF-16 surrogates, which cannot be written back as UTF-8."""
    if isinstance(value, str):
        if any("\ud800" <= ch <= "\udfff" for ch in value):
            raise ValueError(f"lone surrogate in string {value!r}")
    elif isinstance(value, dict):
        for key, item in value.items():
            _check_strings(key)
            _check_strings(item)
    elif isinstance(value, list):
        for item in value:
            _check_strings(item)


def load_ion_json(filename):
    """Read ``filename`` completely and parse it as strict JSON."""
    try:
        with open(filename, "r", encoding="utf-8") as f:
            contents = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise IonIOError(f"Not able to read json file {filename}: {exc}") from exc

    try:
        data = json.loads(contents, parse_constant=_reject_constant)
        _check_strings(data)
    except ValueError as exc:
        raise IonParseError(f"Not able to parse {filename}: {exc}") from exc
    return data


def _field(obj: Any, key: str, path: str) -> tuple[Any, str]:
    field_path = f"{path}.{key}" if path else key
    if not isinstance(obj, dict):
        raise MissingFieldError(field_path, "a field of an object")
    return obj.get(key), field_path


def _array(obj: Any, key: str, path: str) -> tuple[list, str]:
    value, field_path = _field(obj, key, path)
    if not isinstance(value, list):
        raise MissingFieldError(field_path, "an array")
    return value, field_path


def decode_instruction(data: Any, path: str) -> Instruction:
    opcode, opcode_path = _field(data, "opcode", path)
    if not isinstance(opcode, str):
        raise MissingFieldError(opcode_path, "a string")

    ident, id_path = _field(data, "id", path)
    # bool is an int subclass but never a valid instruction id
    if isinstance(ident, bool) or not isinstance(ident, int) or ident < 0:
        raise MissingFieldError(id_path, "a non-negative integer")

    return Instruction(ident, opcode, data.get("type"))


def decode_block(data: Any, path: str) -> Block:
    instructions, instr_path = _array(data, "instructions", path)
    successors, _ = _array(data, "successors", path)
    return Block(
        data.get("number"),
        tuple(
            decode_instruction(instr, f"{instr_path}[{idx}]")
            for idx, instr in enumerate(instructions)
        ),
        tuple(successors),
    )


def decode_pass(data: Any, path: str) -> Pass:
    # Only the MIR tier is rendered; a sibling "lir" entry is ignored.
    mir, mir_path = _field(data, "mir", path)
    blocks, blocks_path = _array(mir, "blocks", mir_path)
    return Pass(
        data.get("name"),
        tuple(
            decode_block(block, f"{blocks_path}[{idx}]")
            for idx, block in enumerate(blocks)
        ),
    )


def decode_function(data: Any, path: str) -> Function:
    passes, passes_path = _array(data, "passes", path)
    return Function(
        data.get("name"),
        tuple(
            decode_pass(p, f"{passes_path}[{idx}]") for idx, p in enumerate(passes)
        ),
    )


def decode_document(data: Any) -> Document:
    """
    Validate a parsed ion.json tree and build the typed model.

    Raises :class:`MissingFieldError` naming the first offending field.
    """

    functions, functions_path = _array(data, "functions", "")
    return Document(
        tuple(
            decode_function(func, f"{functions_path}[{idx}]")
            for idx, func in enumerate(functions)
        )
    )


def _output_mode(target: Path) -> int:
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_disassembly(text, filename):
    """Atomically replace ``filename`` with ``text``."""

    target = Path(filename)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(text)
        os.chmod(tmp_name, _output_mode(target))
        os.replace(tmp_name, target)
    except (OSError, UnicodeError) as exc:
        raise IonIOError(f"unable to write output {filename}: {exc}") from exc
    finally:
        # Already renamed away on success.
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    return target


__all__ = [
    "load_ion_json",
    "decode_instruction",
    "decode_block",
    "decode_pass",
    "decode_function",
    "decode_document",
    "write_disassembly",
]
