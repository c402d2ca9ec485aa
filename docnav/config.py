"""Configuration loading for docnav (.docnav.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".docnav.yml"

DEFAULT_CATEGORY_ICONS: Dict[str, str] = {
    "getting-started": "Rocket",
    "core-concepts": "BookOpen",
    "api-reference": "Code",
    "guides": "Map",
    "installation": "Download",
    "core": "Cpu",
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Locations of the generated navigation artifacts, relative to the root."""

    structure: str = "public/docs-structure.json"
    flat: str = "public/docs-flat.json"


@dataclass
class DocNavConfig:
    """Represents the settings defined in .docnav.yml."""

    root: Path
    docs_dir: str = "public/docs"
    output: OutputConfig = field(default_factory=OutputConfig)
    url_prefix: str = "/docs"
    reserved_prefix: str = "_"
    meta_filename: str = "_meta.json"
    default_icons: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CATEGORY_ICONS))
    max_workers: int = 1

    @property
    def docs_root(self) -> Path:
        return self.root / self.docs_dir

    @property
    def structure_path(self) -> Path:
        return self.root / self.output.structure

    @property
    def flat_path(self) -> Path:
        return self.root / self.output.flat

    def is_excluded_dir(self, name: str) -> bool:
        """Hidden and reserved-prefix directories never enter navigation."""
        if name.startswith("."):
            return True
        return bool(self.reserved_prefix) and name.startswith(self.reserved_prefix)


def load_config(config_path: Path) -> DocNavConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocNavConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DocNavConfig(root=root)

    docs_dir = _as_str(data.get("docs_dir"))
    if docs_dir:
        config.docs_dir = docs_dir

    output_data = _as_dict(data.get("output"))
    if output_data:
        structure = _as_str(output_data.get("structure"))
        flat = _as_str(output_data.get("flat"))
        if structure:
            config.output.structure = structure
        if flat:
            config.output.flat = flat

    url_prefix = _as_str(data.get("url_prefix"))
    if url_prefix is not None:
        config.url_prefix = "/" + url_prefix.strip("/") if url_prefix.strip("/") else ""

    reserved_prefix = _as_str(data.get("reserved_prefix"))
    if reserved_prefix is not None:
        config.reserved_prefix = reserved_prefix

    icons = _as_dict(data.get("default_icons"))
    for name, icon in icons.items():
        icon_name = _as_str(icon)
        if icon_name:
            config.default_icons[str(name)] = icon_name

    max_workers = _as_int(data.get("max_workers"))
    if max_workers is not None:
        if max_workers < 1:
            raise ConfigError("max_workers must be a positive integer")
        config.max_workers = max_workers

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_CATEGORY_ICONS",
    "DocNavConfig",
    "OutputConfig",
    "load_config",
]
