from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "cuebook"

_WEB_AND_IO = {
    "fastapi",
    "starlette",
    "redis",
    "sqlalchemy",
    "httpx",
    "requests",
    "opentelemetry",
    "jwt",
    "pwdlib",
    "cuebook.api",
    "cuebook.infrastructure",
}

LAYER_RULES: dict[str, frozenset[str]] = {
    "domain": frozenset(
        _WEB_AND_IO | {"pydantic", "prometheus_client", "cuebook.application", "cuebook.tools"}
    ),
    "application": frozenset(_WEB_AND_IO | {"cuebook.tools"}),
}


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches_forbidden(module: str, forbidden_modules: frozenset[str]) -> bool:
    for forbidden in forbidden_modules:
        if module == forbidden or module.startswith(f"{forbidden}."):
            return True
    return False


def _scan_file(file_path: Path, forbidden_modules: frozenset[str]) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    violations: list[Violation] = []

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            modules = [node.module]
        else:
            continue
        for module in modules:
            if _matches_forbidden(module, forbidden_modules):
                violations.append(Violation(file_path=file_path, line=node.lineno, module=module))

    return violations


def find_violations(paths: Sequence[Path], layer: str = "domain") -> list[Violation]:
    forbidden_modules = LAYER_RULES[layer]
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path, forbidden_modules))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import policy check for the cuebook domain and application layers."
    )
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_RULES),
        default=None,
        help="Layer rules to enforce. Defaults to checking every layer.",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to src/cuebook/<layer>.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    layers = [args.layer] if args.layer else sorted(LAYER_RULES)

    violations: list[Violation] = []
    for layer in layers:
        scan_paths = [Path(item) for item in args.path] if args.path else [PACKAGE_ROOT / layer]
        violations.extend(find_violations(scan_paths, layer=layer))

    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
