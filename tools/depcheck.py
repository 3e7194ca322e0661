"""Layering check: keep frameworks out of the domain and adapters out of use cases."""

from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

SOURCE_ROOT = Path(__file__).resolve().parents[1] / "src" / "foh"

FRAMEWORK_MODULES = frozenset(
    {
        "fastapi",
        "starlette",
        "pydantic",
        "sqlalchemy",
        "alembic",
        "redis",
        "httpx",
        "pandas",
        "jose",
        "bcrypt",
        "opentelemetry",
        "prometheus_client",
    }
)
ADAPTER_MODULES = frozenset({"foh.api", "foh.infrastructure", "foh.tools"})

# layer directory -> modules it must not import
LAYER_RULES: dict[str, frozenset[str]] = {
    "domain": FRAMEWORK_MODULES | ADAPTER_MODULES | {"foh.application"},
    "application": ADAPTER_MODULES,
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


def _matches(module: str, forbidden: frozenset[str]) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in forbidden)


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def scan_file(file_path: Path, forbidden: frozenset[str]) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    return [
        Violation(file_path=file_path, line=line, module=module)
        for line, module in _imported_modules(tree)
        if _matches(module, forbidden)
    ]


def find_violations(
    source_root: Path = SOURCE_ROOT,
    rules: dict[str, frozenset[str]] | None = None,
) -> list[Violation]:
    violations: list[Violation] = []
    for layer, forbidden in (rules or LAYER_RULES).items():
        for file_path in _python_files(source_root / layer):
            violations.extend(scan_file(file_path, forbidden))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import layering check for src/foh.")
    parser.add_argument(
        "--root",
        default=str(SOURCE_ROOT),
        help="Package root holding the layer directories. Defaults to src/foh.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    violations = find_violations(Path(args.root))
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
