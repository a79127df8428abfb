from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a Click runner for invoking the siteflon command."""
    return CliRunner()


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """Provides a temporary directory that is also the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
