"""Configuration loading and management."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .constants import DEFAULT_CHARS_PER_LINE, DEFAULT_MAX_FILE_SIZE


@dataclass
class WrapConfig:
    """Configuration for reflowing Markdown and rendering equations.

    Attributes:
        chars_per_line: Target width of reflowed lines, counted in code points.
        max_file_size: Maximum file size in bytes that will be processed.
        tex2svg: Path of the ``tex2svg`` executable used by ``md-latex``.
        img_dir: Directory where ``md-latex`` writes equation images.

    Examples:
        WrapConfig(chars_per_line=72)
    """

    chars_per_line: int = DEFAULT_CHARS_PER_LINE
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    # Equation rendering
    tex2svg: str | None = None
    img_dir: str | None = None


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`chars_per_line` must be a positive integer")
    """


_MISSING = object()


def load_config(search_path: Path) -> WrapConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md-wrap]`` table from `pyproject.toml` and the ``[md-wrap]`` or
    ``[tool.md-wrap]`` table from `.md-wrap.toml`. The first table found wins.
    TOML files that cannot be read or decoded are skipped. A relative
    ``img_dir`` is resolved against the directory of the file that sets it.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        WrapConfig: Loaded configuration, or defaults when nothing is found.

    Raises:
        ConfigError: If a table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "md-wrap")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".md-wrap.toml",
            table_paths=[("md-wrap",), ("tool", "md-wrap")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return WrapConfig()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> WrapConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> WrapConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # `chars-per-line` and `chars_per_line` name the same field
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        config = WrapConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error

    # A relative `img_dir` is relative to the file that sets it
    if isinstance(config.img_dir, str) and config.img_dir:
        img_dir = Path(config.img_dir).expanduser()
        if not img_dir.is_absolute():
            config.img_dir = str(config_file.parent / img_dir)
    return config


def validate_config(config: WrapConfig) -> None:
    """Validate a `WrapConfig` instance.

    Raises:
        ConfigError: If numeric limits are not positive integers or path
            settings are not strings.

    Examples:
        validate_config(WrapConfig(chars_per_line=72))
    """
    for key in ("chars_per_line", "max_file_size"):
        value = getattr(config, key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")

    for key in ("tex2svg", "img_dir"):
        value = getattr(config, key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"`{key}` must be a string")
        if value == "":
            raise ConfigError(f"`{key}` must not be empty")


def apply_overrides(config: WrapConfig, **overrides: object) -> WrapConfig:
    """Apply override values to a `WrapConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None are ignored.

    Returns:
        WrapConfig: New configuration, or `config` itself when nothing changes.

    Raises:
        ConfigError: If an override name is not a configuration field.

    Examples:
        updated = apply_overrides(config, chars_per_line=100)
    """
    known = {field.name for field in fields(WrapConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> WrapConfig:
    """Load, override, and validate configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), chars_per_line=72)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
