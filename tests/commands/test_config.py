"""Tests for the config command group."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from classforge.cli.cli import cli
from classforge.core.config import InMemoryConfigOps, RegistryConfig
from tests.fakes.context import create_test_context


def test_config_show_displays_defaults() -> None:
    runner = CliRunner()
    ctx = create_test_context(config_ops=InMemoryConfigOps())

    result = runner.invoke(cli, ["config", "show"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Configuration (defaults):" in result.output
    assert "atomic_definitions=true" in result.output
    assert "debug=false" in result.output


def test_config_show_displays_loaded_values() -> None:
    config = RegistryConfig(atomic_definitions=False, default_imports=("math", "decimal"))
    runner = CliRunner()
    ctx = create_test_context(config=config)

    result = runner.invoke(cli, ["config", "show"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "/fake/classforge/config.toml" in result.output
    assert "atomic_definitions=false" in result.output
    assert "default_imports=math,decimal" in result.output


def test_config_init_writes_defaults() -> None:
    ops = InMemoryConfigOps()
    runner = CliRunner()
    ctx = create_test_context(config_ops=ops)

    result = runner.invoke(cli, ["config", "init"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert ops.exists()
    assert ops.load() == RegistryConfig()


def test_config_init_refuses_to_overwrite() -> None:
    ops = InMemoryConfigOps(RegistryConfig(debug=True))
    runner = CliRunner()
    ctx = create_test_context(config_ops=ops)

    result = runner.invoke(cli, ["config", "init"], obj=ctx)

    assert result.exit_code == 1
    assert "Config already exists" in result.output
    assert ops.load().debug is True


def test_config_init_force_overwrites() -> None:
    ops = InMemoryConfigOps(RegistryConfig(debug=True))
    runner = CliRunner()
    ctx = create_test_context(config_ops=ops)

    result = runner.invoke(cli, ["config", "init", "--force"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert ops.load().debug is False


def test_cli_reports_malformed_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an injected context the CLI loads ~/.classforge/config.toml."""
    monkeypatch.setenv("HOME", str(tmp_path))
    config_path = tmp_path / ".classforge" / "config.toml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text("atomic_definitions = 'sometimes'\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "atomic_definitions" in result.output


def test_cli_builds_context_from_home_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "init"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / ".classforge" / "config.toml").exists()


def test_cli_reports_unknown_default_import(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    config_path = tmp_path / ".classforge" / "config.toml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text("default_imports = ['no_such_module_xyz']\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "no_such_module_xyz" in result.output
