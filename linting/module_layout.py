#!/usr/bin/env python
"""Module layout policy for the browser_tools package.

Two rules, checked on top-level statements only:
- ``__all__`` is assigned exactly once, never mutated, and is the last statement.
- A module defines at most one class that is not a dataclass. Dataclass-based
  records and error types may share a module.
"""

from __future__ import annotations

import ast
import sys
import argparse
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DIRS = ("browser_tools",)


def _is_all(node: ast.AST | None) -> bool:
    return isinstance(node, ast.Name) and node.id == "__all__"


def _all_definition(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return len(node.targets) == 1 and _is_all(node.targets[0])
    if isinstance(node, ast.AnnAssign):
        return _is_all(node.target) and node.value is not None
    return False


def _touches_all(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return any(_is_all(t) for t in node.targets)
    if isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        return _is_all(node.target)
    if isinstance(node, ast.Delete):
        return any(_is_all(t) for t in node.targets)
    if isinstance(node, ast.Expr) and isinstance(node.value, ast.Call):
        func = node.value.func
        return isinstance(func, ast.Attribute) and _is_all(func.value)
    return False


def _label(node: ast.stmt) -> str:
    name = getattr(node, "name", None)
    if name:
        return f"{type(node).__name__} `{name}`"
    return type(node).__name__


def _is_dataclass(node: ast.ClassDef) -> bool:
    for decorator in node.decorator_list:
        target = decorator.func if isinstance(decorator, ast.Call) else decorator
        if isinstance(target, ast.Name) and target.id == "dataclass":
            return True
        if isinstance(target, ast.Attribute) and target.attr == "dataclass":
            return True
    return False


def check_all_placement(tree: ast.Module, rel: Path) -> list[str]:
    definitions = [idx for idx, node in enumerate(tree.body) if _all_definition(node)]
    mutations = [node for node in tree.body if _touches_all(node) and not _all_definition(node)]

    violations = [f"  {rel}:{node.lineno} `__all__` mutated; assign it once at the bottom" for node in mutations]
    if len(definitions) > 1:
        violations.append(f"  {rel}: `__all__` assigned {len(definitions)} times")
    if len(definitions) != 1:
        return violations

    for node in tree.body[definitions[0] + 1 :]:
        violations.append(f"  {rel}:{node.lineno} {_label(node)} after `__all__`")
    return violations


def check_class_count(tree: ast.Module, rel: Path) -> list[str]:
    classes = [n.name for n in tree.body if isinstance(n, ast.ClassDef) and not _is_dataclass(n)]
    if len(classes) <= 1:
        return []
    return [f"  {rel}: {len(classes)} classes ({', '.join(classes)})"]


def collect_violations(path: Path, root: Path = ROOT) -> list[str]:
    try:
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []
    rel = path.relative_to(root) if path.is_relative_to(root) else path
    return check_all_placement(tree, rel) + check_class_count(tree, rel)


def scan(dirs: list[str] | tuple[str, ...] = DEFAULT_DIRS, root: Path = ROOT) -> list[str]:
    violations: list[str] = []
    for d in dirs:
        scan_dir = (root / d).resolve()
        if not scan_dir.is_dir():
            continue
        for py_file in sorted(scan_dir.rglob("*.py")):
            if "__pycache__" in py_file.parts:
                continue
            violations.extend(collect_violations(py_file, root))
    return violations


def main() -> int:
    parser = argparse.ArgumentParser(description="Check __all__ placement and one class per module.")
    parser.add_argument("--dirs", nargs="+", default=list(DEFAULT_DIRS), help="Directories to scan")
    args = parser.parse_args()

    violations = scan(args.dirs)
    if violations:
        print("module layout violations:", file=sys.stderr)
        for violation in violations:
            print(violation, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
