"""TOML-based config file loading for clipcat.

Searches for `.clipcat.toml`, `clipcat.toml`, or `pyproject.toml [tool.clipcat]`
walking up from the current directory. The file provides the "exclude glob
patterns" setting and, optionally, workspace roots used for labeling. Config values
are merged with CLI options into an immutable `Settings` object, read once per
invocation and passed explicitly to the core.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from clipcat.exceptions import ConfigError
from clipcat.types import PathType

# Config file search order (first match wins within each directory level)
CONFIG_FILENAMES = [".clipcat.toml", "clipcat.toml", "pyproject.toml"]


@dataclass
class ClipcatConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    so the merge can tell "not configured" from "explicitly empty".
    """

    exclude: Optional[List[str]] = None
    workspace: Optional[List[str]] = None
    encoding: Optional[str] = None
    source: Optional[Path] = None


@dataclass(frozen=True)
class Settings:
    """Settings for one invocation, after merging CLI options with the config file.

    Attributes:
        exclude_patterns: User-configured exclusion patterns. Built-in patterns are
            added by the resolver and are not listed here.
        workspace_roots: Absolute directories file labels are made relative to.
        encoding: Encoding used to read text files.

    Example:
        >>> Settings(exclude_patterns=("**/dist/**",)).encoding
        'utf-8'
    """

    exclude_patterns: Tuple[str, ...] = ()
    workspace_roots: Tuple[Path, ...] = field(default_factory=tuple)
    encoding: str = "utf-8"


def find_config_file(start_dir: Path) -> Optional[Path]:
    """
    Walk up from `start_dir` looking for a config file. Returns the first found, or
    `None`. `pyproject.toml` only counts if it has a `[tool.clipcat]` table.
    """
    current = start_dir.resolve()
    while True:
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename != "pyproject.toml" or _pyproject_has_clipcat_section(candidate):
                    return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _pyproject_has_clipcat_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError):
        return False
    return "clipcat" in data.get("tool", {})


def _string_list(path: Path, data: Dict[str, Any], key: str) -> Optional[List[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(path, f"'{key}' must be a list of strings")
    return list(value)


def load_config(config_path: Path) -> ClipcatConfig:
    """
    Load a `ClipcatConfig` from a TOML file. Supports standalone `clipcat.toml` /
    `.clipcat.toml` and `pyproject.toml` (reads `[tool.clipcat]`).

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or holds values
            of the wrong type.
    """
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(config_path, e.strerror or str(e)) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(config_path, str(e)) from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("clipcat", {})

    encoding = data.get("encoding")
    if encoding is not None and not isinstance(encoding, str):
        raise ConfigError(config_path, "'encoding' must be a string")

    return ClipcatConfig(
        exclude=_string_list(config_path, data, "exclude"),
        workspace=_string_list(config_path, data, "workspace"),
        encoding=encoding,
        source=config_path,
    )


def merge_settings(
    config: Optional[ClipcatConfig],
    cli_excludes: Sequence[str] = (),
    cli_workspaces: Sequence[PathType] = (),
    cwd: Optional[Path] = None,
) -> Settings:
    """
    Merge CLI options with config file settings.

    Exclusion patterns from both sources are combined. Workspace roots given on the
    command line replace the configured ones; without either, the current
    directory is the only workspace root. A configured empty list means no
    workspace roots, so every label is an absolute path. Configured workspace roots
    are resolved against the directory holding the config file.

    Example:
        >>> config = ClipcatConfig(exclude=["**/dist/**"])
        >>> settings = merge_settings(config, ["**/*.map"], cwd=Path("/proj"))
        >>> settings.exclude_patterns
        ('**/dist/**', '**/*.map')
        >>> [str(root) for root in settings.workspace_roots]
        ['/proj']
    """
    base_dir = cwd if cwd is not None else Path.cwd()

    configured = (config.exclude or []) if config is not None else []
    excludes: List[str] = []
    for pattern in [*configured, *cli_excludes]:
        if pattern not in excludes:
            excludes.append(pattern)

    if cli_workspaces:
        roots = [Path(os.path.abspath(base_dir / Path(root))) for root in cli_workspaces]
    elif config is not None and config.workspace is not None:
        config_dir = config.source.parent if config.source is not None else base_dir
        roots = [Path(os.path.abspath(config_dir / root)) for root in config.workspace]
    else:
        roots = [Path(os.path.abspath(base_dir))]

    encoding = config.encoding if config is not None and config.encoding else "utf-8"
    return Settings(exclude_patterns=tuple(excludes), workspace_roots=tuple(roots), encoding=encoding)
