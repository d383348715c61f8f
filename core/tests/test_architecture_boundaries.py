from __future__ import annotations

import ast
import os
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

PACKAGE_ROOT = Path(PROJECT_ROOT) / "noteshift_core"

TYPING_PATH_MODULES = ("trigger.py", "expansion.py", "cache.py", "aggregate.py")


def _iter_python_files(root: Path) -> list[Path]:
    return sorted(path for path in root.rglob("*.py") if path.is_file())


def _collect_import_modules(file_path: Path) -> set[str]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                modules.add(alias.name)
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                modules.add(node.module)
    return modules


class TestArchitectureBoundaries(unittest.TestCase):
    def test_core_does_not_import_gui_layer(self) -> None:
        violations: list[str] = []
        for file_path in _iter_python_files(PACKAGE_ROOT):
            for module in _collect_import_modules(file_path):
                if module.startswith(("apps", "PySide6", "main", "dialogs", "state", "models")):
                    rel = file_path.relative_to(PACKAGE_ROOT.parent)
                    violations.append(f"{rel}: {module}")
        self.assertEqual(violations, [])

    def test_typing_path_never_touches_sqlite(self) -> None:
        violations: list[str] = []
        for name in TYPING_PATH_MODULES:
            file_path = PACKAGE_ROOT / name
            for module in _collect_import_modules(file_path):
                if module in ("sqlite3", "noteshift_core.store", "noteshift_core.admin"):
                    violations.append(f"{name}: {module}")
        self.assertEqual(violations, [])


if __name__ == "__main__":
    unittest.main()
