from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def relres_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_python_files(base: Path) -> list[Path]:
    root = relres_root()
    files: list[Path] = []
    for path in sorted(base.rglob("*.py")):
        rel = path.relative_to(root)
        if any(part == "__pycache__" or part.startswith(".") for part in rel.parts):
            continue
        if rel.parts and rel.parts[0] == "test":
            continue
        files.append(path)
    return files


def parse_imports(path: Path) -> list[ImportRef]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imports: list[ImportRef] = []

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append(ImportRef(module=alias.name, line=node.lineno))
            continue

        if isinstance(node, ast.ImportFrom):
            if node.level and node.level > 0:
                continue
            if node.module is None:
                continue
            imports.append(ImportRef(module=node.module, line=node.lineno))

    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _violations(base: Path, forbidden: tuple[str, ...]) -> list[str]:
    root = relres_root()
    offenders: list[str] = []
    for file_path in iter_python_files(base):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


def test_release_logic_is_pure() -> None:
    offenders = _violations(
        relres_root() / "releases",
        ("relres.cli", "relres.services", "relres.output", "relres.feed", "typer", "rich"),
    )
    assert not offenders, "releases layer violations:\n" + "\n".join(offenders)


def test_services_do_not_import_cli_modules() -> None:
    offenders = _violations(relres_root() / "services", ("relres.cli", "typer"))
    assert not offenders, "services -> cli dependency violations:\n" + "\n".join(offenders)


def test_direct_rich_imports_are_limited_to_console() -> None:
    root = relres_root()
    offenders = [
        line
        for line in _violations(root, ("rich",))
        if not line.startswith(str(Path("output") / "console.py"))
    ]
    assert not offenders, "Direct rich usage policy violations:\n" + "\n".join(offenders)
