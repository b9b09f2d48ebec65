"""Editor after-edit hook: rerun a test file when it is created or changed.

The editor sends a JSON payload on stdin:
    {"file_path": "...", "workspace_roots": ["..."]}

Anything that is not a test file is ignored. The hook never blocks the
editor: bad payloads exit 0.
"""

import json
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import List, Optional

from rich.console import Console


console = Console(stderr=True)

TEST_DIRECTORIES = {"tests", "e2e"}


@dataclass
class EditPayload:
    """File edit reported by the editor."""

    file_path: str
    workspace_roots: List[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, raw: str) -> Optional["EditPayload"]:
        """Parse the payload; None for empty input or a payload of the wrong shape."""
        if not raw.strip():
            return None
        data = json.loads(raw)
        if not isinstance(data, dict):
            return None

        file_path = data.get("file_path")
        if not isinstance(file_path, str) or not file_path:
            return None

        roots = data.get("workspace_roots") or []
        if not isinstance(roots, list) or not all(isinstance(r, str) for r in roots):
            return None
        return cls(file_path=file_path, workspace_roots=roots)

    @property
    def workspace_root(self) -> Path:
        if self.workspace_roots:
            return Path(self.workspace_roots[0])
        return Path.cwd()


def is_test_file(file_path: str) -> bool:
    """Check whether a path is a pytest test module."""
    path = PurePath(file_path)
    if path.suffix != ".py":
        return False
    if path.name.startswith("test_") or path.stem.endswith("_test"):
        return True
    return any(part in TEST_DIRECTORIES for part in path.parts[:-1]) and path.name != "conftest.py"


def relative_test_path(file_path: str, workspace_root: Path) -> str:
    """Path of the test file relative to the workspace, with forward slashes."""
    path = Path(file_path)
    if path.is_absolute():
        try:
            path = path.relative_to(workspace_root)
        except ValueError:
            pass
    return path.as_posix()


def build_test_command(test_path: str) -> List[str]:
    return [sys.executable, "-m", "pytest", test_path]


def run_after_edit(raw: str) -> int:
    """Handle one after-edit payload.

    Returns:
        pytest's exit code when a test file was run, 0 otherwise.
    """
    try:
        payload = EditPayload.from_json(raw)
    except (json.JSONDecodeError, TypeError) as e:
        console.print(f"[yellow]after-edit hook: {e}[/yellow]")
        return 0

    if payload is None or not is_test_file(payload.file_path):
        return 0

    root = payload.workspace_root
    cwd = root if root.is_absolute() else Path.cwd()
    test_path = relative_test_path(payload.file_path, root)

    cmd = build_test_command(test_path)
    console.print(f"[yellow]Running: {' '.join(cmd)}[/yellow]")

    result = subprocess.run(cmd, cwd=cwd)
    return result.returncode
