"""Shared constant values for the iongraph disassembler."""

DEFAULT_IONFILE = "/tmp/ion.json"
DEFAULT_OUTFILE = "/tmp/iongraph"

# Visual gap added after the widest mnemonic/operand of a block.
COLUMN_GUTTER = 5
ID_WIDTH = 3

INSTRUCTION_INDENT = " " * 10
BLOCK_INDENT = " " * 6

FUNCTION_HEADER = "\n\nGraph for Function: {name}"
PASS_HEADER = "\n\n  After Ion Phase {name}\n\n"
BLOCK_HEADER = "\n" + BLOCK_INDENT + "Block#{number}\n"

EXIT_SUCCESS = 0
EXIT_FAILURE = 255

__all__ = [
    "DEFAULT_IONFILE",
    "DEFAULT_OUTFILE",
    "COLUMN_GUTTER",
    "ID_WIDTH",
    "INSTRUCTION_INDENT",
    "BLOCK_INDENT",
    "FUNCTION_HEADER",
    "PASS_HEADER",
    "BLOCK_HEADER",
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
]
