"""Hatchling build hook that embeds the git commit into the linemark package."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

BUILD_INFO_PATH = "linemark/_build_info.py"


class CustomBuildHook(BuildHookInterface):
    """Writes linemark/_build_info.py before the wheel is assembled."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        target_path = Path(self.root) / BUILD_INFO_PATH
        target_path.write_text(self._build_info_source(), encoding="utf-8")
        # Generated file is ignored by git, so list it explicitly
        build_data.setdefault("artifacts", []).append(BUILD_INFO_PATH)

    def _build_info_source(self) -> str:
        project_root = Path(self.root)
        commit = self._run_git(["rev-parse", "HEAD"], cwd=project_root)
        date = self._run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=project_root)
        return (
            "# Auto-generated at build time.\n"
            f"COMMIT = {commit!r}\n"
            f"DATE = {date!r}\n"
        )

    def _run_git(self, args: list[str], cwd: Path) -> str | None:
        try:
            out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
            return out.decode().strip() or None
        except (subprocess.CalledProcessError, FileNotFoundError, OSError):
            # Build should not fail just because git is unavailable
            return None
