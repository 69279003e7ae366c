"""Writing bindings to TypeScript files, with imports for their dependencies."""

from __future__ import annotations

import json
import os
from pathlib import Path, PurePosixPath

from tsbind.types import TS

NOTE = "// This file was generated by tsbind. Do not edit this file manually.\n"
MANIFEST_DIR_VAR = "TSBIND_MANIFEST_DIR"


class ExportError(Exception):
    """Raised when a type cannot be exported."""


class CannotBeExported(ExportError):
    def __init__(self) -> None:
        super().__init__("this type cannot be exported")


class ManifestDirNotSet(ExportError):
    def __init__(self) -> None:
        super().__init__(f"the environment variable {MANIFEST_DIR_VAR} is not set")


def export_type(ty: TS, base_dir: str | os.PathLike[str] | None = None) -> Path:
    """Export ``ty`` to its export path below ``base_dir`` and return the file's path."""
    if base_dir is None:
        base_dir = os.environ.get(MANIFEST_DIR_VAR)
        if base_dir is None:
            raise ManifestDirNotSet()
    target = ty.export_to
    if target is None:
        raise CannotBeExported()
    path = Path(base_dir) / target
    export_type_to(ty, path)
    return path


def export_type_to(ty: TS, path: str | os.PathLike[str]) -> None:
    """Export ``ty`` to the file at ``path``, creating directories as needed."""
    content = export_type_to_string(ty)
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ExportError("an error occurred while performing IO") from exc


def export_type_to_string(ty: TS) -> str:
    """The file content for ``ty``: header, imports and declaration."""
    target = ty.export_to
    if target is None:
        raise CannotBeExported()
    deps = {dep.ts_name: dep for dep in ty.dependencies() if dep.type_id is not ty}
    parts = [NOTE]
    for ts_name in sorted(deps):
        rel = import_path(target, deps[ts_name].exported_to)
        parts.append(f"import type {{ {ts_name} }} from {json.dumps(rel)};\n")
    parts.append("\n")
    parts.append("export " + ty.decl())
    return "".join(parts)


def import_path(origin: str | PurePosixPath, target: str | PurePosixPath) -> str:
    """The module path to import ``target`` from within the file ``origin``."""
    rel = diff_paths(target, PurePosixPath(origin).parent)
    if rel is None:
        raise ExportError("failed to calculate import path")
    parts = PurePosixPath(rel).parts if rel else ()
    if parts and parts[0] not in ("..", "/"):
        rel = f"./{rel}"
    while rel.endswith(".ts"):
        rel = rel[: -len(".ts")]
    return rel


def diff_paths(path: str | PurePosixPath, base: str | PurePosixPath) -> str | None:
    """The relative path from directory ``base`` to ``path``, if there is one."""
    path = PurePosixPath(path)
    base = PurePosixPath(base)
    if path.is_absolute() != base.is_absolute():
        return str(path) if path.is_absolute() else None

    ita, itb = path.parts, base.parts
    comps: list[str] = []
    i = j = 0
    while True:
        a = ita[i] if i < len(ita) else None
        b = itb[j] if j < len(itb) else None
        if a is None and b is None:
            break
        if b is None:
            comps.extend(ita[i:])
            break
        if a is None:
            comps.append("..")
            j += 1
            continue
        if not comps and a == b:
            i += 1
            j += 1
            continue
        if b == "..":
            return None
        comps.append("..")
        comps.extend([".."] * (len(itb) - j - 1))
        comps.extend(ita[i:])
        break
    return "/".join(comps)