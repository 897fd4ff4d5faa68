"""Lexer options and TOML config loading."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from fuselex.errors import ConfigError

CONFIG_FILENAME = "fuselex.toml"

DIALECTS = ("fuse", "classic")


@dataclass(frozen=True, slots=True)
class LexerOptions:
    """User-facing lexer options.

    function_highlighting: classify builtin names as Name.Builtin.
    disabled_modules: builtin names removed from the builtin set.
    dialect: which keyword/operator table to use ("fuse" or "classic").
    """

    function_highlighting: bool = True
    disabled_modules: tuple[str, ...] = ()
    dialect: str = "fuse"

    def __post_init__(self) -> None:
        if self.dialect not in DIALECTS:
            raise ConfigError(
                f"unknown dialect '{self.dialect}' (expected one of: {', '.join(DIALECTS)})"
            )

    def merged(self, **overrides: Any) -> LexerOptions:
        """Return a copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def options_from_dict(data: dict[str, Any], base: LexerOptions | None = None) -> LexerOptions:
    """Build LexerOptions from a `[lexer]` config table."""
    options = base or LexerOptions()
    known = {"function_highlighting", "disabled_modules", "dialect"}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown lexer option(s): {', '.join(unknown)}")

    highlighting = data.get("function_highlighting")
    if highlighting is not None and not isinstance(highlighting, bool):
        raise ConfigError("function_highlighting must be a boolean")

    modules = data.get("disabled_modules")
    if modules is not None:
        if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
            raise ConfigError("disabled_modules must be a list of strings")
        modules = tuple(modules)

    dialect = data.get("dialect")
    if dialect is not None and not isinstance(dialect, str):
        raise ConfigError("dialect must be a string")

    return options.merged(
        function_highlighting=highlighting,
        disabled_modules=modules,
        dialect=dialect,
    )


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def load_options(config_path: Path | None, input_dir: Path) -> LexerOptions:
    """Load LexerOptions from the `[lexer]` table of a config file."""
    config = load_config(config_path, input_dir)
    table = config.get("lexer", {})
    if not isinstance(table, dict):
        raise ConfigError("[lexer] must be a table")
    return options_from_dict(table)
