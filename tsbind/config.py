"""Project settings read from ``ts.toml``."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from tsbind.export import MANIFEST_DIR_VAR, ManifestDirNotSet


@dataclass(frozen=True)
class Config:
    """Settings of a project; defaults apply when no settings file exists."""

    ambient_declarations: bool = False
    out_dir: str = "typescript"

    FILE_NAME: ClassVar[str] = "ts.toml"
    _instance: ClassVar[Config | None] = None

    @classmethod
    def get(cls) -> Config:
        """The settings, loaded once and then shared."""
        if Config._instance is None:
            Config._instance = cls.load()
        return Config._instance

    @classmethod
    def load(cls) -> Config:
        """Load the settings from the project directory, or use the defaults."""
        directory = os.environ.get(MANIFEST_DIR_VAR)
        if directory is None:
            raise ManifestDirNotSet()
        loaded = cls.try_load_from_dir(Path(directory))
        return loaded if loaded is not None else cls()

    @classmethod
    def try_load_from_dir(cls, directory: str | os.PathLike[str]) -> Config | None:
        """The settings in ``directory``, or None if it has no settings file."""
        path = Path(directory) / cls.FILE_NAME
        if not path.is_file():
            return None
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        try:
            ambient = data["ambient_declarations"]
            out_dir = data["out_dir"]
        except KeyError as exc:
            raise ValueError(f"missing field `{exc.args[0]}`") from None
        if not isinstance(ambient, bool):
            raise ValueError("`ambient_declarations` must be a boolean")
        if not isinstance(out_dir, str):
            raise ValueError("`out_dir` must be a string")
        return cls(ambient_declarations=ambient, out_dir=out_dir)