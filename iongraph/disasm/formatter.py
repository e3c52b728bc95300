"""Text disassembly of decoded Ion compiler logs."""

from __future__ import annotations

from typing import Iterable, Optional

from ..constants import (
    BLOCK_HEADER,
    COLUMN_GUTTER,
    FUNCTION_HEADER,
    ID_WIDTH,
    INSTRUCTION_INDENT,
    PASS_HEADER,
)
from .core import Block, Document, Function, Instruction, Pass, render_json, render_name
from .loader import decode_document, load_ion_json


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def column_widths(instructions: Iterable[Instruction]) -> tuple[int, int]:
    """
    Return the padded mnemonic and operand widths for one block.

    Widths are measured in UTF-8 bytes while padding counts characters, so
    non-ASCII text gets extra trailing spaces.
    """

    opcode_width = 0
    operand_width = 0
    for instr in instructions:
        opcode_width = max(opcode_width, _byte_len(instr.mnemonic))
        operand_width = max(operand_width, _byte_len(instr.operand))
    return opcode_width + COLUMN_GUTTER, operand_width + COLUMN_GUTTER


def format_instruction(instr: Instruction, widths: tuple[int, int]) -> str:
    opw, orw = widths
    return (
        f"{INSTRUCTION_INDENT}{instr.id:>{ID_WIDTH}}: "
        f"{instr.mnemonic:<{opw}} {instr.operand:<{orw}} {render_json(instr.type)}\n"
    )


def format_instructions(
    instructions: Iterable[Instruction],
    widths: Optional[tuple[int, int]] = None,
) -> str:
    """
    Render one block's instructions as aligned lines.

    Column widths are measured over the whole block first. Callers handling
    very large graphs may pass fixed ``widths`` to skip that pass.
    """

    instructions = list(instructions)
    if widths is None:
        widths = column_widths(instructions)
    return "".join(format_instruction(instr, widths) for instr in instructions)


def format_successors(successors) -> str:
    if len(successors) == 1:
        return f"{INSTRUCTION_INDENT}Successor: Block#{render_json(successors[0])}\n"
    if len(successors) == 2:
        return (
            f"{INSTRUCTION_INDENT}Successors: "
            f"T:Block#{render_json(successors[0])} "
            f"F:Block#{render_json(successors[1])}\n"
        )
    if len(successors) > 2:
        # No indentation here, unlike the one- and two-way forms.
        targets = " ".join(f"Block#{render_json(s)}" for s in successors)
        return f"Successors: {targets}\n"
    return ""


def format_block(block: Block) -> str:
    return (
        BLOCK_HEADER.format(number=render_json(block.number))
        + format_instructions(block.instructions)
        + format_successors(block.successors)
    )


def format_blocks(blocks: Iterable[Block]) -> str:
    return "".join(format_block(block) for block in blocks)


def format_passes(passes: Iterable[Pass]) -> str:
    out = []
    for pass_ in passes:
        out.append(PASS_HEADER.format(name=render_name(pass_.name)))
        out.append(format_blocks(pass_.blocks))
    return "".join(out)


def format_function(func: Function) -> str:
    return FUNCTION_HEADER.format(name=render_name(func.name)) + format_passes(
        func.passes
    )


def format_graph(document: Document) -> str:
    """Render every function of ``document`` into one disassembly string."""
    return "".join(format_function(func) for func in document.functions)


def render_ion_json(filename) -> str:
    """Load, validate and disassemble an ion.json file."""
    return format_graph(decode_document(load_ion_json(filename)))


__all__ = [
    "column_widths",
    "format_instruction",
    "format_instructions",
    "format_successors",
    "format_block",
    "format_blocks",
    "format_passes",
    "format_function",
    "format_graph",
    "render_ion_json",
]
