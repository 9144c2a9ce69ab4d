"""Tests for the install and show CLI commands."""

import json
from collections.abc import Callable
from pathlib import Path

from click.testing import CliRunner

from bundle_kit.cli.cli import cli

BundleFactory = Callable[..., Path]


def test_install_command_first_install(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test install writes commands and config and reports counts."""
    root = make_bundle(commands={"a": ["Read"]}, mcp={"mcpServers": {"x": 1}})

    result = cli_runner.invoke(
        cli, ["install", str(root), "--target-dir", str(target_dir)], catch_exceptions=False
    )

    assert result.exit_code == 0
    assert "✓ Installed 1 command(s)" in result.output
    assert "Added config keys: mcpServers" in result.output
    assert json.loads((target_dir / "settings.json").read_text(encoding="utf-8")) == {
        "mcpServers": {"x": 1}
    }
    assert (target_dir / "commands" / "a.md").is_file()


def test_install_command_reports_kept_values_and_backup(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test user values shadowing plugin values are listed."""
    target_dir.mkdir(parents=True)
    (target_dir / "settings.json").write_text('{"theme": "dark"}', encoding="utf-8")
    root = make_bundle(config={"theme": "light"})

    result = cli_runner.invoke(
        cli, ["install", str(root), "--target-dir", str(target_dir)], catch_exceptions=False
    )

    assert result.exit_code == 0
    assert "Backup:" in result.output
    assert "Kept your existing values for: theme" in result.output


def test_install_command_broad_permissions(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test --permissions broad writes the union of allowed tools."""
    root = make_bundle(commands={"a": ["Read"], "b": ["Grep"]})

    result = cli_runner.invoke(
        cli,
        ["install", str(root), "--target-dir", str(target_dir), "--permissions", "broad"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    data = json.loads((target_dir / "settings.json").read_text(encoding="utf-8"))
    assert data == {"permissions": {"allow": ["Grep", "Read"]}}


def test_install_command_unknown_permission_mode(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test an unknown selector fails before anything is written."""
    root = make_bundle(commands={"a": ["Read"]})

    result = cli_runner.invoke(
        cli,
        ["install", str(root), "--target-dir", str(target_dir), "--permissions", "everything"],
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "Unsupported permission mode" in result.output
    assert not target_dir.exists()


def test_install_command_malformed_config(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test malformed existing config exits 1 with a clean message."""
    target_dir.mkdir(parents=True)
    (target_dir / "settings.json").write_text("{oops", encoding="utf-8")
    root = make_bundle(commands={"a": None})

    result = cli_runner.invoke(
        cli, ["install", str(root), "--target-dir", str(target_dir)], catch_exceptions=False
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Traceback" not in result.output
    assert (target_dir / "settings.json").read_text(encoding="utf-8") == "{oops"


def test_install_command_unsupported_mapping(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test from-command mapping failures name the command."""
    root = make_bundle(commands={"odd": ["Teleport"]})

    result = cli_runner.invoke(
        cli,
        ["install", str(root), "--target-dir", str(target_dir), "--permissions", "from-command"],
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "Command 'odd'" in result.output


def test_install_command_dry_run(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test --dry-run prints the merged config and writes nothing."""
    root = make_bundle(commands={"a": None}, mcp={"mcpServers": {"x": 1}})

    result = cli_runner.invoke(
        cli,
        ["install", str(root), "--target-dir", str(target_dir), "--dry-run"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "would write" in result.output
    assert '"mcpServers"' in result.output
    assert not target_dir.exists()


def test_install_command_custom_paths(
    make_bundle: BundleFactory, tmp_path: Path, cli_runner: CliRunner
) -> None:
    """Test --config and --commands-dir override the defaults."""
    root = make_bundle(commands={"a": None}, mcp={"mcpServers": {"x": 1}})
    config_path = tmp_path / "host" / "opencode.json"
    commands_dir = tmp_path / "host" / "command"

    result = cli_runner.invoke(
        cli,
        [
            "install",
            str(root),
            "--target-dir",
            str(tmp_path / "host"),
            "--config",
            str(config_path),
            "--commands-dir",
            str(commands_dir),
        ],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert config_path.is_file()
    assert (commands_dir / "a.md").is_file()


def test_show_command(make_bundle: BundleFactory, cli_runner: CliRunner) -> None:
    """Test show lists commands with their tools, agents and skills."""
    root = make_bundle(
        commands={"workflows/review": ["Read"]},
        agents=["security-sentinel"],
        skills=["frontend-design"],
        mcp={"mcpServers": {"x": 1}},
    )

    result = cli_runner.invoke(cli, ["show", str(root)], catch_exceptions=False)

    assert result.exit_code == 0
    assert "demo-plugin v1.2.0" in result.output
    assert "/workflows:review [Read]" in result.output
    assert "security-sentinel" in result.output
    assert "frontend-design" in result.output
    assert "Plugin config keys: mcpServers" in result.output


def test_show_command_json(make_bundle: BundleFactory, cli_runner: CliRunner) -> None:
    """Test show --json emits machine-readable output."""
    root = make_bundle(commands={"a": ["Read"]})

    result = cli_runner.invoke(cli, ["show", str(root), "--json"], catch_exceptions=False)

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["name"] == "demo-plugin"
    assert data["commands"] == [{"name": "a", "allowed_tools": ["Read"]}]


def test_cli_without_subcommand_shows_help(cli_runner: CliRunner) -> None:
    """Test bare invocation prints help."""
    result = cli_runner.invoke(cli, [], catch_exceptions=False)

    assert result.exit_code == 0
    assert "install" in result.output


def test_install_command_mapping_error_precedes_malformed_config(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test an unmappable tool is reported before the existing config is read."""
    target_dir.mkdir(parents=True)
    (target_dir / "settings.json").write_text("{oops", encoding="utf-8")
    root = make_bundle(commands={"odd": ["Teleport"]})

    result = cli_runner.invoke(
        cli,
        ["install", str(root), "--target-dir", str(target_dir), "--permissions", "from-command"],
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "Command 'odd'" in result.output
    assert "Existing config" not in result.output


def test_install_command_not_utf8_config(
    make_bundle: BundleFactory, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test an undecodable config exits 1 with a clean message."""
    target_dir.mkdir(parents=True)
    (target_dir / "settings.json").write_bytes(b'{"theme": "\xff"}')
    root = make_bundle(commands={"a": None})

    result = cli_runner.invoke(
        cli, ["install", str(root), "--target-dir", str(target_dir)], catch_exceptions=False
    )

    assert result.exit_code == 1
    assert "Error: Existing config" in result.output
    assert "Traceback" not in result.output


def test_install_command_agent_and_skill_dirs(
    make_bundle: BundleFactory, tmp_path: Path, target_dir: Path, cli_runner: CliRunner
) -> None:
    """Test --agents-dir and --skills-dir redirect those artifacts."""
    root = make_bundle(agents=["security-sentinel"], skills=["frontend-design"])
    agents_dir = tmp_path / "shared" / "agents"
    skills_dir = tmp_path / "shared" / "skills"

    result = cli_runner.invoke(
        cli,
        [
            "install",
            str(root),
            "--target-dir",
            str(target_dir),
            "--agents-dir",
            str(agents_dir),
            "--skills-dir",
            str(skills_dir),
        ],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert (agents_dir / "security-sentinel.md").is_file()
    assert (skills_dir / "frontend-design" / "SKILL.md").is_file()
    assert not (target_dir / "agents").exists()
