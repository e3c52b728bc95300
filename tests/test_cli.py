"""Tests for ``iongraph.disasm.cli``."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from iongraph import DEFAULT_IONFILE, DEFAULT_OUTFILE, EXIT_FAILURE, EXIT_SUCCESS
from iongraph.disasm import cli as disasm_cli

ROOT = Path(__file__).resolve().parents[1]


SAMPLE = {
    "functions": [
        {
            "name": "f",
            "passes": [
                {
                    "name": "p1",
                    "mir": {
                        "blocks": [
                            {
                                "number": 0,
                                "instructions": [
                                    {"id": 0, "opcode": "mov r1 r2", "type": "Int32"}
                                ],
                                "successors": [1],
                            },
                            {"number": 1, "instructions": [], "successors": []},
                        ]
                    },
                }
            ],
        }
    ]
}


def _write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_parse_args_defaults():
    params = disasm_cli.parse_args([])
    assert params.ionfile == DEFAULT_IONFILE == "/tmp/ion.json"
    assert params.outfile == DEFAULT_OUTFILE == "/tmp/iongraph"


def test_parse_args_short_flags():
    params = disasm_cli.parse_args(["-i", "in.json", "-o", "out.txt"])
    assert params.ionfile == "in.json"
    assert params.outfile == "out.txt"


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as excinfo:
        disasm_cli.parse_args(["--help"])
    assert excinfo.value.code == 0
    assert "--ionfile" in capsys.readouterr().out


def test_main_writes_disassembly(tmp_path, capsys):
    ionfile = _write_json(tmp_path / "ion.json", SAMPLE)
    outfile = tmp_path / "iongraph"

    code = disasm_cli.main(["--ionfile", str(ionfile), "--outfile", str(outfile)])

    assert code == EXIT_SUCCESS
    text = outfile.read_text(encoding="utf-8")
    assert text.startswith("\n\nGraph for Function: f")
    assert "After Ion Phase p1" in text
    assert "Successor: Block#1" in text
    assert text.endswith("\n      Block#1\n")
    assert "✓ Disassembly written" in capsys.readouterr().out


def test_main_is_deterministic(tmp_path):
    ionfile = _write_json(tmp_path / "ion.json", SAMPLE)
    first = tmp_path / "first"
    second = tmp_path / "second"

    disasm_cli.main(["-i", str(ionfile), "-o", str(first)])
    disasm_cli.main(["-i", str(ionfile), "-o", str(second)])

    assert first.read_bytes() == second.read_bytes()


def test_main_missing_input(tmp_path, capsys, monkeypatch):
    outfile = tmp_path / "iongraph"

    def fail_decode(data):  # pragma: no cover - must not be reached
        raise AssertionError("parsing attempted")

    monkeypatch.setattr("iongraph.disasm.formatter.decode_document", fail_decode)

    code = disasm_cli.main(["-i", str(tmp_path / "absent.json"), "-o", str(outfile)])

    assert code == EXIT_FAILURE
    assert "✗ Not able to read json file" in capsys.readouterr().out
    assert not outfile.exists()


def test_main_malformed_json(tmp_path, capsys):
    ionfile = tmp_path / "ion.json"
    ionfile.write_text("{not json", encoding="utf-8")
    outfile = tmp_path / "iongraph"

    code = disasm_cli.main(["-i", str(ionfile), "-o", str(outfile)])

    assert code == EXIT_FAILURE
    assert "✗ Not able to parse" in capsys.readouterr().out
    assert not outfile.exists()


def test_main_missing_opcode_leaves_output_untouched(tmp_path, capsys):
    data = json.loads(json.dumps(SAMPLE))
    del data["functions"][0]["passes"][0]["mir"]["blocks"][0]["instructions"][0]["opcode"]
    ionfile = _write_json(tmp_path / "ion.json", data)
    outfile = tmp_path / "iongraph"
    outfile.write_text("previous", encoding="utf-8")

    code = disasm_cli.main(["-i", str(ionfile), "-o", str(outfile)])

    assert code == EXIT_FAILURE
    output = capsys.readouterr().out
    assert "✗ Invalid input document" in output
    assert "opcode" in output
    assert outfile.read_text(encoding="utf-8") == "previous"


def test_main_unwritable_output(tmp_path, capsys):
    ionfile = _write_json(tmp_path / "ion.json", SAMPLE)
    outfile = tmp_path / "no-such-dir" / "iongraph"

    code = disasm_cli.main(["-i", str(ionfile), "-o", str(outfile)])

    assert code == EXIT_FAILURE
    assert "✗ unable to write output" in capsys.readouterr().out
    assert not outfile.exists()


def test_module_entry_point_exit_status(tmp_path):
    ionfile = tmp_path / "ion.json"
    ionfile.write_text("[", encoding="utf-8")
    outfile = tmp_path / "iongraph"

    proc = subprocess.run(
        [sys.executable, "-m", "iongraph", "-i", str(ionfile), "-o", str(outfile)],
        cwd=ROOT,
        capture_output=True,
        text=True,
        env={**os.environ, "PYTHONIOENCODING": "utf-8"},
    )

    assert proc.returncode == EXIT_FAILURE
    assert not outfile.exists()


def test_main_lone_surrogate_is_a_parse_failure(tmp_path, capsys):
    data = json.loads(json.dumps(SAMPLE))
    data["functions"][0]["passes"][0]["mir"]["blocks"][0]["instructions"][0]["type"] = "\ud800"
    ionfile = tmp_path / "ion.json"
    ionfile.write_text(json.dumps(data), encoding="utf-8")
    outdir = tmp_path / "out"
    outdir.mkdir()

    code = disasm_cli.main(["-i", str(ionfile), "-o", str(outdir / "iongraph")])

    assert code == EXIT_FAILURE
    assert "✗ Not able to parse" in capsys.readouterr().out
    assert os.listdir(outdir) == []
