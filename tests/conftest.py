"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from bundle_kit.models.installation import InstallContext

BundleFactory = Callable[..., Path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Host configuration directory for an install run."""
    return tmp_path / "target" / ".claude"


@pytest.fixture
def install_context(target_dir: Path) -> InstallContext:
    """InstallContext rooted at target_dir with default paths."""
    return InstallContext.for_target(target_dir)


def _command_file(description: str, allowed_tools: list[str] | None, body: str) -> str:
    lines = ["---", f"description: {description}"]
    if allowed_tools is not None:
        lines.append(f"allowed-tools: {', '.join(allowed_tools)}")
    lines.append("---")
    lines.append("")
    lines.append(body)
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_bundle(tmp_path: Path) -> BundleFactory:
    """Factory that writes a bundle source tree and returns its root.

    Keyword args:
        name: Plugin name for plugin.json (None to omit the manifest)
        commands: Mapping of relative command path (without .md) to allowed tools
        agents: List of relative agent paths (without .md)
        skills: List of skill directory names
        mcp: Content for .mcp.json
        config: Content for config.json
    """

    def _make(
        name: str | None = "demo-plugin",
        commands: dict[str, list[str] | None] | None = None,
        agents: list[str] | None = None,
        skills: list[str] | None = None,
        mcp: dict[str, object] | None = None,
        config: dict[str, object] | None = None,
    ) -> Path:
        root = tmp_path / "bundles" / (name or "unnamed-plugin")
        root.mkdir(parents=True)

        if name is not None:
            manifest_dir = root / ".claude-plugin"
            manifest_dir.mkdir()
            manifest = {"name": name, "version": "1.2.0", "description": "Demo plugin"}
            (manifest_dir / "plugin.json").write_text(json.dumps(manifest), encoding="utf-8")

        for relative, tools in (commands or {}).items():
            path = root / "commands" / f"{relative}.md"
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                _command_file(f"Run {relative}", tools, f"# {relative}\n\nDo the thing."),
                encoding="utf-8",
            )

        for relative in agents or []:
            path = root / "agents" / f"{relative}.md"
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"---\nname: {Path(relative).name}\n---\n\nAgent.\n", encoding="utf-8")

        for skill in skills or []:
            skill_dir = root / "skills" / skill
            skill_dir.mkdir(parents=True)
            (skill_dir / "SKILL.md").write_text(f"---\nname: {skill}\n---\n", encoding="utf-8")
            (skill_dir / "reference.md").write_text("Reference\n", encoding="utf-8")

        if mcp is not None:
            (root / ".mcp.json").write_text(json.dumps(mcp), encoding="utf-8")
        if config is not None:
            (root / "config.json").write_text(json.dumps(config), encoding="utf-8")

        return root

    return _make
