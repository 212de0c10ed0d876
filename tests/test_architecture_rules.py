"""Architecture enforcement tests for the scopegate layering.

Repository-local invariants keeping the cancellation core decoupled from
outer layers. Import boundaries only; the checks fail fast if a forbidden
dependency is introduced.

Rules validated here:
1) ``scopegate/base`` must not import ``scopegate.lifecycle``.
   - Owner and teardown adapters sit on top of the core, never below it.
2) ``scopegate/config`` must not import ``scopegate.base``.
   - Settings are a leaf; logging and the core read from them.

These tests are static-file scans to avoid import-time side effects, and they
emit clear failure messages for quick remediation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest


REPO_ROOT = Path(__file__).resolve().parent.parent


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under a root directory.

    Parameters
    ----------
    root: Path
        The directory to scan recursively.

    Yields
    ------
    Path
        Paths to ``.py`` files under ``root``, skipping ``__pycache__`` and
        the package-level test directory.
    """

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts or "tests" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _scan(root: Path, forbidden_snippets: List[str]) -> List[str]:
    offenders: List[str] = []
    for py in _iter_python_files(root):
        src = _read_text(py)
        offenders.extend(f"{py}: contains '{m}'" for m in forbidden_snippets if m in src)
    return offenders


def test_core_does_not_import_lifecycle() -> None:
    """Ensure core modules do not import the lifecycle layer.

    Contract
    --------
    - Scope: files under ``scopegate/base``.
    - Forbidden: absolute or relative imports of ``scopegate.lifecycle``.
    """

    core_root = REPO_ROOT / "scopegate" / "base"
    if not core_root.is_dir():
        pytest.skip("scopegate/base not found; skipping boundary check")

    offenders = _scan(
        core_root,
        [
            "from scopegate.lifecycle",
            "import scopegate.lifecycle",
            "from ..lifecycle",
            "from ...lifecycle",
        ],
    )
    if offenders:
        pytest.fail("Core must not import the lifecycle layer.\n" + "\n".join(offenders))


def test_config_is_a_leaf() -> None:
    """Ensure the settings layer does not reach into the core."""

    config_root = REPO_ROOT / "scopegate" / "config"
    if not config_root.is_dir():
        pytest.skip("scopegate/config not found; skipping boundary check")

    offenders = _scan(
        config_root,
        [
            "from scopegate.base",
            "import scopegate.base",
            "from ..base",
        ],
    )
    if offenders:
        pytest.fail("Config must not import the core.\n" + "\n".join(offenders))
