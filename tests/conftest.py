import subprocess

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def tex2svg_calls(monkeypatch) -> list[list[str]]:
    """Replaces the external tex2svg renderer with one that records its commands."""
    calls: list[list[str]] = []

    def run(command, stdout=None, stderr=None, check=False):
        calls.append(command)
        stdout.write(f"<svg>{command[-1]}</svg>".encode())
        return subprocess.CompletedProcess(command, 0)

    monkeypatch.setattr("md_wrap.latex.subprocess.run", run)
    return calls
