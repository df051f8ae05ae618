"""Tests for the CLI entry point (run.py)."""

import json
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _run(*args):
    return subprocess.run(
        [sys.executable, "run.py", *args],
        capture_output=True, text=True,
        cwd=PROJECT_ROOT,
    )


class TestCLI:
    def test_help(self):
        result = _run("--help")
        assert result.returncode == 0
        assert "serve" in result.stdout
        assert "languages" in result.stdout
        assert "compare" in result.stdout

    def test_compare_help(self):
        result = _run("compare", "--help")
        assert result.returncode == 0
        assert "--dry-run" in result.stdout
        assert "--source-language" in result.stdout

    def test_languages(self):
        result = _run("languages")
        assert result.returncode == 0
        lines = result.stdout.strip().splitlines()
        assert len(lines) == 16
        assert lines[0].split("\t")[0] == "Chinese (Simplified)"

    def test_detect_dry_run(self):
        result = _run("detect", "--dry-run", "This sentence is written in plain English for the test.")
        assert result.returncode == 0
        assert json.loads(result.stdout)["language"] == "English"

    def test_blank_text_is_an_error(self):
        result = _run("detect", "--dry-run", "   ")
        assert result.returncode == 1
        assert "Text is required" in result.stderr
