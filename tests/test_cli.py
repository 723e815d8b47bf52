"""Tests for the Click CLI interface.

These tests verify that:
1. The lockfile argument and its default are handled
2. Environment variables are used as fallbacks
3. Output can be printed or written to a file
4. Help and version options work
5. Failures exit non-zero with a message
"""

from importlib import import_module
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from bun_lockb import parse
from bun_lockb.cli.main import LOCKB_VERSION, Config, build_config, cli
from bun_lockb.exceptions import ConfigurationError

# Import the module object explicitly so we can patch its attributes.
# bun_lockb.cli.__init__.py re-exports the `main` function, which shadows the submodule.
cli_main_module = import_module("bun_lockb.cli.main")


@pytest.fixture
def runner():
    return CliRunner()


class TestCLIHelp:
    """Test CLI help and version options."""

    def test_help_option(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Parse and print bun.lockb in text format" in result.output
        assert "--output" in result.output

    def test_short_help_option(self, runner):
        result = runner.invoke(cli, ["-h"])
        assert result.exit_code == 0
        assert "Parse and print bun.lockb in text format" in result.output

    @pytest.mark.parametrize("flag", ["-v", "-V", "--version"])
    def test_version_option(self, runner, flag):
        result = runner.invoke(cli, [flag])
        assert result.exit_code == 0
        assert result.output.strip() == f"bun-lockb, {LOCKB_VERSION}"


class TestCLIRun:
    """Test reading, printing and writing lockfiles."""

    def test_prints_lockfile(self, runner, tmp_path, lodash_lockfile):
        lock_file = tmp_path / "bun.lockb"
        lock_file.write_bytes(lodash_lockfile)

        result = runner.invoke(cli, [str(lock_file)])

        assert result.exit_code == 0
        assert result.output == parse(lodash_lockfile) + "\n"

    def test_default_path(self, runner, tmp_path, monkeypatch, lodash_lockfile):
        (tmp_path / "bun.lockb").write_bytes(lodash_lockfile)
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "# yarn lockfile v1" in result.output
        assert "lodash@^4.17.0:" in result.output

    def test_lock_file_env_var(self, runner, tmp_path, lodash_lockfile):
        lock_file = tmp_path / "custom.lockb"
        lock_file.write_bytes(lodash_lockfile)

        result = runner.invoke(cli, [], env={"LOCK_FILE": str(lock_file)})

        assert result.exit_code == 0
        assert "lodash@^4.17.0:" in result.output

    def test_output_file(self, runner, tmp_path, lodash_lockfile):
        lock_file = tmp_path / "bun.lockb"
        lock_file.write_bytes(lodash_lockfile)
        output = tmp_path / "yarn.lock"

        result = runner.invoke(cli, [str(lock_file), "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == parse(lodash_lockfile)
        assert "# yarn lockfile v1" not in result.output

    def test_summary(self, runner, tmp_path, lodash_lockfile):
        lock_file = tmp_path / "bun.lockb"
        lock_file.write_bytes(lodash_lockfile)
        output = tmp_path / "yarn.lock"

        result = runner.invoke(cli, [str(lock_file), "-o", str(output), "--summary"])

        assert result.exit_code == 0
        assert "Packages" in result.output

    def test_run_receives_config(self, runner, tmp_path):
        with patch.object(cli_main_module, "run") as mock_run:
            result = runner.invoke(cli, [str(tmp_path / "x.lockb"), "--log-level", "error"])

        assert result.exit_code == 0
        config = mock_run.call_args[0][0]
        assert config.lock_file.endswith("x.lockb")
        assert config.log_level == "ERROR"
        assert config.output_file is None


class TestCLIErrors:
    """Test failure reporting."""

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, [str(tmp_path / "missing.lockb")])
        assert result.exit_code == 1
        assert "Cannot read lockfile" in result.output

    def test_invalid_lockfile(self, runner, tmp_path):
        lock_file = tmp_path / "bun.lockb"
        lock_file.write_bytes(b"#!/usr/bin/env node\n")

        result = runner.invoke(cli, [str(lock_file)])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_outdated_lockfile(self, runner, tmp_path, builder):
        lock_file = tmp_path / "bun.lockb"
        lock_file.write_bytes(builder.build(format_version=1))

        result = runner.invoke(cli, [str(lock_file)])

        assert result.exit_code == 1
        assert "Outdated lockfile version" in result.output

    def test_invalid_log_level(self, runner, tmp_path):
        result = runner.invoke(cli, [str(tmp_path / "bun.lockb"), "--log-level", "LOUD"])
        assert result.exit_code != 0


class TestConfig:
    """Test configuration building and validation."""

    def test_defaults(self):
        config = build_config()
        assert config == Config(lock_file="bun.lockb", output_file=None, log_level="WARNING")

    def test_log_level_is_normalised(self):
        assert build_config(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError):
            build_config(log_level="verbose")

    def test_empty_output_path(self):
        with pytest.raises(ConfigurationError):
            build_config(output_file="")
