"""Test suite for service commands."""

import os

import pytest
from typer.testing import CliRunner

from pagewright_cli.commands.service import app


@pytest.fixture
def runner():
    return CliRunner()


class TestSweepCommand:
    def test_sweep_removes_expired_artifacts(self, runner, tmp_path, monkeypatch):
        results = tmp_path / 'results'
        results.mkdir()
        stale = results / 'merged_1.pdf'
        fresh = results / 'merged_2.pdf'
        stale.write_bytes(b'stale')
        fresh.write_bytes(b'fresh')
        os.utime(stale, (0, 0))
        monkeypatch.setenv('PAGEWRIGHT_OUTPUT_DIR', str(results))

        result = runner.invoke(app, ['sweep'])

        assert result.exit_code == 0
        assert not stale.exists()
        assert fresh.exists()

    def test_sweep_without_output_dir(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv('PAGEWRIGHT_OUTPUT_DIR', str(tmp_path / 'missing'))

        result = runner.invoke(app, ['sweep'])

        assert result.exit_code == 0
