"""Layer dependency checker.

Walks a package with ``ast``, assigns every module to an architectural layer
from its directory names and reports imports that cross a forbidden boundary.

Layers (deepest matching directory wins):
    api, services, repositories, entities, models, core

Default rules:
    - ``api`` must not import ``repositories`` or ``entities``
    - ``services`` must not import ``api``
    - ``repositories`` must not import ``services`` or ``api``
    - ``entities`` must not import ``repositories``, ``services`` or ``api``

Usage:
    cafeteria-arch-lint                      # lint the installed cafeteria_api package
    cafeteria-arch-lint path/to/package
    cafeteria-arch-lint --config rules.json  # {"layers": [...], "forbidden": {"api": [...]}}

Exit status is 0 when clean, 1 when violations are found.
"""

from __future__ import annotations

import argparse
import ast
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

DEFAULT_LAYERS: Tuple[str, ...] = ("api", "services", "repositories", "entities", "models", "core")

DEFAULT_FORBIDDEN: Dict[str, FrozenSet[str]] = {
    "api": frozenset({"repositories", "entities"}),
    "services": frozenset({"api"}),
    "repositories": frozenset({"services", "api"}),
    "entities": frozenset({"repositories", "services", "api"}),
}


@dataclass(frozen=True)
class Rules:
    layers: Tuple[str, ...] = DEFAULT_LAYERS
    forbidden: Dict[str, FrozenSet[str]] = field(default_factory=lambda: dict(DEFAULT_FORBIDDEN))


@dataclass(frozen=True)
class Violation:
    path: Path
    line: int
    source_layer: str
    target_layer: str
    module: str

    def format(self) -> str:
        return (
            f"{self.path}:{self.line}: layer '{self.source_layer}' must not import "
            f"layer '{self.target_layer}' ({self.module})"
        )


def load_rules(config_path: Optional[Path]) -> Rules:
    """Build rules from the defaults, overridden by an optional JSON file."""
    if config_path is None:
        return Rules()
    raw = json.loads(config_path.read_text(encoding="utf-8"))
    layers = tuple(raw.get("layers", DEFAULT_LAYERS))
    forbidden = dict(DEFAULT_FORBIDDEN)
    for layer, targets in raw.get("forbidden", {}).items():
        forbidden[layer] = frozenset(targets)
    return Rules(layers=layers, forbidden=forbidden)


def layer_of(parts: Sequence[str], layers: Sequence[str]) -> Optional[str]:
    """Return the layer named by the deepest matching component of ``parts``."""
    for part in reversed(parts):
        if part in layers:
            return part
    return None


def module_parts(path: Path, package_root: Path) -> List[str]:
    """Dotted module components of ``path``, starting with the package name."""
    rel = path.relative_to(package_root.parent).with_suffix("")
    parts = list(rel.parts)
    if parts[-1] == "__init__":
        parts.pop()
    return parts


def iter_imports(tree: ast.AST, parts: List[str], is_package: bool) -> Iterator[Tuple[int, str, str]]:
    """Yield ``(line, module, imported_name)`` for every import.

    Relative imports are resolved against the importing module. For
    ``from pkg import name`` the imported name is ``pkg.name`` so that
    importing a layer package by name is still attributed to that layer.
    """
    package = parts if is_package else parts[:-1]
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name, alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package[: len(package) - (node.level - 1)]
                module = ".".join(base + ([node.module] if node.module else []))
            else:
                module = node.module or ""
            for alias in node.names:
                name = module if alias.name == "*" else f"{module}.{alias.name}"
                yield node.lineno, module, name


def check_file(path: Path, package_root: Path, rules: Rules) -> List[Violation]:
    parts = module_parts(path, package_root)
    source_layer = layer_of(parts[1:], rules.layers)
    if source_layer is None:
        return []
    banned = rules.forbidden.get(source_layer, frozenset())
    if not banned:
        return []

    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    violations = []
    for line, module, name in iter_imports(tree, parts, path.name == "__init__.py"):
        target_parts = name.split(".")
        if target_parts[0] != package_root.name:
            continue
        target_layer = layer_of(target_parts[1:], rules.layers)
        if target_layer in banned:
            violations.append(Violation(path, line, source_layer, target_layer, module))
    return violations


def check_package(package_root: Path, rules: Optional[Rules] = None) -> List[Violation]:
    """Lint every module below ``package_root`` and return the violations found."""
    rules = rules or Rules()
    violations: List[Violation] = []
    for path in sorted(package_root.rglob("*.py")):
        violations.extend(check_file(path, package_root, rules))
    return violations


def _default_package() -> Path:
    return Path(__file__).resolve().parents[1]


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Check layer boundaries between packages")
    parser.add_argument(
        "package",
        nargs="?",
        type=Path,
        default=None,
        help="Package directory to lint (default: the cafeteria_api package)",
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON file overriding layers and rules")
    args = parser.parse_args(argv)

    package_root = (args.package or _default_package()).resolve()
    if not package_root.is_dir():
        parser.error(f"not a directory: {package_root}")

    try:
        rules = load_rules(args.config)
    except (OSError, ValueError) as exc:
        parser.error(f"cannot read config {args.config}: {exc}")

    try:
        violations = check_package(package_root, rules)
    except SyntaxError as exc:
        print(f"{exc.filename}:{exc.lineno}: syntax error: {exc.msg}", file=sys.stderr)
        return 1

    for violation in violations:
        print(violation.format())
    if violations:
        print(f"{len(violations)} layer violation(s) found", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
