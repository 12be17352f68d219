"""
Generator configuration.

A :class:`GeneratorConfig` is built per run by layering, in order: the
language defaults, an optional JSON config file, then explicit overrides
(CLI flags or the ``options`` passed to ``render_types``). ``type_mapping``
is merged entry by entry; every other key replaces the previous layer.
Unknown keys are kept in ``custom``.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

DEFAULT_BANNER = "/** GENERATED BY BENDEC TYPE GENERATOR */"

LANGUAGE_DEFAULTS: Mapping[str, Mapping[str, Any]] = MappingProxyType(
    {
        "cpp": MappingProxyType(
            {"attribute": "", "indent_size": 4, "strict_references": True}
        ),
    }
)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable configuration for one generation run."""

    output_file: Optional[str] = None
    banner: str = DEFAULT_BANNER
    indent_size: int = 4

    # Emitted on its own line before struct, enum and union declarations
    attribute: str = ""

    # Name -> target type, layered over the generator's built-in mapping
    type_mapping: Mapping[str, str] = field(default_factory=dict)

    strict_references: bool = True

    custom: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.type_mapping, Mapping):
            raise ConfigError(
                "type_mapping must be an object, "
                f"got {type(self.type_mapping).__name__}"
            )
        for key, value in self.type_mapping.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise ConfigError(
                    f"type_mapping entries must map names to names: {key!r}: {value!r}"
                )
        if isinstance(self.indent_size, bool) or not isinstance(self.indent_size, int):
            raise ConfigError(f"indent_size must be an integer: {self.indent_size!r}")
        if self.indent_size < 0:
            raise ConfigError(f"indent_size must not be negative: {self.indent_size}")
        for name in ("banner", "attribute"):
            if not isinstance(getattr(self, name), str):
                raise ConfigError(f"{name} must be a string")
        if not isinstance(self.strict_references, bool):
            raise ConfigError("strict_references must be true or false")

        object.__setattr__(
            self, "type_mapping", MappingProxyType(dict(self.type_mapping))
        )
        object.__setattr__(self, "custom", MappingProxyType(dict(self.custom)))

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "GeneratorConfig":
        """Build a config, moving unknown keys into ``custom``."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in values.items() if k in known}
        extra = {k: v for k, v in values.items() if k not in known}
        if extra:
            kwargs["custom"] = {**dict(kwargs.get("custom") or {}), **extra}
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Flat JSON-ready form; ``from_dict`` reverses it."""
        values = {
            f.name: getattr(self, f.name) for f in fields(self) if f.name != "custom"
        }
        values["type_mapping"] = dict(self.type_mapping)
        values.update(self.custom)
        return values


def merge_layers(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge config layers left to right, ``type_mapping`` per entry."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        for key, value in (layer or {}).items():
            base = merged.get(key)
            if key == "type_mapping" and isinstance(value, Mapping) and isinstance(
                base, Mapping
            ):
                merged[key] = {**base, **value}
            else:
                merged[key] = value
    return merged


def read_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JSON object from ``config_path``.

    Raises:
        ConfigError: If the file is missing, not ``.json`` or not an object
    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")
    if path.suffix.lower() != ".json":
        raise ConfigError(f"Configuration file must be JSON: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must contain a JSON object: {path}")
    return data


class ConfigManager:
    """Builds configs from language defaults, config files and overrides."""

    def __init__(self, defaults: Mapping[str, Mapping[str, Any]] = LANGUAGE_DEFAULTS):
        self._defaults = defaults

    def get_config(
        self,
        language: str = "cpp",
        custom_config: Optional[Mapping[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Layer defaults for ``language``, then ``config_file``, then
        ``custom_config``.

        Raises:
            ConfigError: If the file cannot be read or a value is invalid
        """
        file_layer = read_config_file(config_file) if config_file else None
        values = merge_layers(self._defaults.get(language), file_layer, custom_config)
        try:
            return GeneratorConfig.from_dict(values)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """
        Write ``config`` as a JSON object that ``config_file`` accepts.

        Raises:
            ConfigError: If the file cannot be written
        """
        path = Path(output_path)
        try:
            path.write_text(
                json.dumps(config.to_dict(), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e


_config_manager = ConfigManager()


def load_config(
    language: str = "cpp",
    custom_config: Optional[Mapping[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """Build a config with the shared :class:`ConfigManager`."""
    return _config_manager.get_config(language, custom_config, config_file)


def save_config(config: GeneratorConfig, output_path: Union[str, Path]) -> None:
    """Write ``config`` as JSON with the shared :class:`ConfigManager`."""
    _config_manager.save_config(config, output_path)
