#!/usr/bin/env python3
"""Check the layer rule of the member_discipline package.

Each top-level subpackage may import only the subpackages listed for it
in MAY_IMPORT:

    domain          -> (nothing)
    config          -> (nothing)
    application     -> domain, config
    infrastructure  -> domain, application, config
    api             -> domain, application, config, bootstrap
    bootstrap       -> anything (composition root)

The api reaches stubs and observability only through bootstrap, never by
importing infrastructure directly. Relative imports are resolved against
the importing module before they are checked.

Usage:
    python scripts/check_imports.py [package_directory]

Exit codes:
    0: No violations found
    1: Violations found
"""

from __future__ import annotations

import ast
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

PACKAGE_NAME = "member_discipline"

# None means unrestricted
MAY_IMPORT: dict[str, frozenset[str] | None] = {
    "domain": frozenset(),
    "config": frozenset(),
    "application": frozenset({"domain", "config"}),
    "infrastructure": frozenset({"domain", "application", "config"}),
    "api": frozenset({"domain", "application", "config", "bootstrap"}),
    "bootstrap": None,
}


@dataclass(frozen=True, order=True)
class Violation:
    """One forbidden import.

    Attributes:
        path: File containing the import.
        line: Line number of the import statement.
        source_layer: Subpackage of the importing file.
        target_layer: Subpackage being imported.
    """

    path: str
    line: int
    source_layer: str
    target_layer: str

    def __str__(self) -> str:
        return (
            f"{self.path}:{self.line}: "
            f"{self.source_layer} may not import {self.target_layer}"
        )


def module_name(py_file: Path, package_dir: Path) -> str:
    """Dotted module name of a file inside the package.

    >>> module_name(Path("pkg/domain/models/member.py"), Path("pkg"))
    'member_discipline.domain.models.member'
    """
    parts = list(py_file.relative_to(package_dir).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    return ".".join([PACKAGE_NAME, *parts])


def _resolve(node: ast.ImportFrom, importer: str, is_package: bool) -> str | None:
    if node.level == 0:
        return node.module
    base = importer.split(".")
    # A package's __init__ resolves "." to itself, a module to its parent
    drop = node.level - 1 if is_package else node.level
    if drop >= len(base):
        return None
    anchor = base[: len(base) - drop]
    return ".".join(anchor + ([node.module] if node.module else []))


def imported_modules(
    tree: ast.Module, importer: str, is_package: bool
) -> Iterator[tuple[int, str]]:
    """Yield (line, absolute module name) for every import in a tree."""
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom):
            resolved = _resolve(node, importer, is_package)
            if resolved:
                yield node.lineno, resolved


def layer_of(module: str) -> str | None:
    """Top-level subpackage of a package module, None for anything else."""
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE_NAME:
        return None
    return parts[1] if parts[1] in MAY_IMPORT else None


def check_file(py_file: Path, package_dir: Path) -> list[Violation]:
    """Check one file of the package.

    Files outside a known subpackage (e.g. the package ``__init__``) and
    files that do not parse are skipped.
    """
    importer = module_name(py_file, package_dir)
    source_layer = layer_of(importer)
    if source_layer is None:
        return []
    allowed = MAY_IMPORT[source_layer]
    if allowed is None:
        return []

    try:
        tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    except (SyntaxError, UnicodeDecodeError) as e:
        print(f"Warning: Could not parse {py_file}: {e}", file=sys.stderr)
        return []

    is_package = py_file.name == "__init__.py"
    violations = []
    for line, module in imported_modules(tree, importer, is_package):
        target_layer = layer_of(module)
        if target_layer in (None, source_layer) or target_layer in allowed:
            continue
        violations.append(Violation(str(py_file), line, source_layer, target_layer))
    return violations


def check_package(package_dir: Path) -> list[Violation]:
    """Check every module under the package directory."""
    if not package_dir.is_dir():
        print(f"Error: Package directory '{package_dir}' does not exist", file=sys.stderr)
        return []
    violations: list[Violation] = []
    for py_file in sorted(package_dir.rglob("*.py")):
        violations.extend(check_file(py_file, package_dir))
    return violations


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    package_dir = (
        Path(args[0]) if args else Path(__file__).parent.parent / PACKAGE_NAME
    )

    violations = check_package(package_dir)
    if not violations:
        print("No import boundary violations found.")
        return 0

    print("Import boundary violations found:\n")
    for violation in sorted(violations):
        print(f"  {violation}")
    print(f"\nTotal: {len(violations)} violation(s)")
    return 1


if __name__ == "__main__":
    sys.exit(main())
