"""Tests for the command line driver."""

from __future__ import annotations

import subprocess
import sys

import pytest

from fixture_helpers import document_path, program_reference
from json_assertions.cli import main


def _person_args(*extra: str) -> list[str]:
    return [
        "--program",
        program_reference("people.py", "PERSON_PROGRAM"),
        "--host",
        program_reference("people.py", "ALICE"),
        *extra,
    ]


def test_encoded_host_passes(capsys: pytest.CaptureFixture[str]) -> None:
    """Encoding the host value itself satisfies the program."""
    assert main(_person_args()) == 0
    assert capsys.readouterr().out == ""


def test_matching_stored_document_passes() -> None:
    """A stored document equal to the encoding passes."""
    assert main(_person_args("--document", str(document_path("alice.yaml")))) == 0


def test_stale_stored_document_reports_failures(capsys: pytest.CaptureFixture[str]) -> None:
    """Every failing branch is printed and the exit code is non-zero."""
    exit_code = main(_person_args("--document", str(document_path("alice_stale.json"))))
    output = capsys.readouterr().out
    assert exit_code == 1
    assert 'subject["age"] failed assertion\nExpected: 42\n     Got: 41' in output
    assert 'subject["tags"] failed to match any targets' in output
    assert "Failures: 2" in output


def test_run_options_flags(capsys: pytest.CaptureFixture[str]) -> None:
    """Flags map onto run options."""
    exit_code = main(
        _person_args(
            "--document",
            str(document_path("alice_stale.json")),
            "--root-label",
            "alice",
            "--index-in-failures",
        )
    )
    output = capsys.readouterr().out
    assert exit_code == 1
    assert 'alice["tags"][1] failed to match any targets' in output


def test_non_program_reference_is_a_usage_error() -> None:
    """Referencing something other than a program exits with status 2."""
    args = [
        "--program",
        program_reference("people.py", "NOT_A_PROGRAM"),
        "--host",
        program_reference("people.py", "ALICE"),
    ]
    with pytest.raises(SystemExit) as excinfo:
        main(args)
    assert excinfo.value.code == 2


def test_missing_attribute_is_a_usage_error() -> None:
    """Unknown attributes exit with status 2."""
    args = _person_args()
    args[1] = program_reference("people.py", "NO_SUCH_PROGRAM")
    with pytest.raises(SystemExit) as excinfo:
        main(args)
    assert excinfo.value.code == 2


def test_cli_help_screen() -> None:
    """Running the CLI help should succeed and print usage information."""
    result = subprocess.run(
        [sys.executable, "-m", "json_assertions", "--help"],
        check=False,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "usage:" in result.stdout.lower()


def test_shape_mismatch_is_a_usage_error() -> None:
    """A host contradicting a declared shape exits with status 2."""
    args = [
        "--program",
        program_reference("people.py", "PERSON_PROGRAM"),
        "--host",
        program_reference("people.py", "UNVERIFIED_CONTACT"),
    ]
    with pytest.raises(SystemExit) as excinfo:
        main(args)
    assert excinfo.value.code == 2
