"""Command-line interface for the iongraph disassembler."""
from __future__ import annotations

import argparse
import sys

from ..constants import DEFAULT_IONFILE, DEFAULT_OUTFILE, EXIT_FAILURE, EXIT_SUCCESS
from .core import IonGraphError, MissingFieldError
from .formatter import render_ion_json
from .loader import write_disassembly


def parse_args(args):
    argp = argparse.ArgumentParser(
        description="Convert an ion.json compiler log into a text based IR form"
    )
    argp.add_argument(
        "-i",
        "--ionfile",
        default=DEFAULT_IONFILE,
        help=f"Path of the ion.json file (default: {DEFAULT_IONFILE})",
    )
    argp.add_argument(
        "-o",
        "--outfile",
        default=DEFAULT_OUTFILE,
        help=f"Path of the file where to save the output (default: {DEFAULT_OUTFILE})",
    )
    return argp.parse_args(args)


def main(args):
    params = parse_args(args)

    try:
        disassembly = render_ion_json(params.ionfile)
    except MissingFieldError as exc:
        print(f"✗ Invalid input document: {exc}")
        return EXIT_FAILURE
    except IonGraphError as exc:
        print(f"✗ {exc}")
        return EXIT_FAILURE

    try:
        write_disassembly(disassembly, params.outfile)
    except IonGraphError as exc:
        print(f"✗ {exc}")
        return EXIT_FAILURE

    print(f"  ✓ Disassembly written → {params.outfile}")
    return EXIT_SUCCESS


__all__ = [
    "main",
    "parse_args",
]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
