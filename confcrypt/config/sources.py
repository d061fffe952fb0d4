"""
Configuration sources.

A ConfigSource is a named, read-only mapping from string keys to string
values. The environment consults an ordered list of them; the decrypting
wrapper implements the same interface so it can stand in for any source.

Provided sources:
- MapConfigSource: an in-memory mapping
- EnvironmentVariableSource: process environment with relaxed key matching
- FileConfigSource: JSON, YAML, INI or .properties files, flattened to dotted keys
"""

import configparser
import json
import logging
import os
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import yaml

from ..errors import ConfigError

logger = logging.getLogger(__name__)


class ConfigFormat(Enum):
    """Supported configuration file formats."""
    JSON = "json"
    YAML = "yaml"
    INI = "ini"
    PROPERTIES = "properties"
    AUTO = "auto"  # Detect from file extension


class ConfigSource(ABC):
    """
    Read-only key/value provider.

    All configuration sources must implement this interface so they can be
    registered with a ConfigEnvironment and wrapped for decryption.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Look up a raw value.

        Args:
            key: Property key, e.g. ``db.password``

        Returns:
            The value, or None when the key is absent
        """
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List the keys this source holds."""
        pass

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class MapConfigSource(ConfigSource):
    """Source over an in-memory mapping. The mapping is never modified."""

    def __init__(self, name: str, mapping: Mapping[str, Any]):
        super().__init__(name)
        self._mapping = mapping

    def get(self, key: str) -> Optional[str]:
        value = self._mapping.get(key)
        if value is None:
            return None
        return _to_str(value)

    def keys(self) -> List[str]:
        return [key for key, value in self._mapping.items() if value is not None]


class EnvironmentVariableSource(ConfigSource):
    """
    Source over environment variables.

    ``db.pool-size`` is found as ``db.pool-size``, ``db_pool-size`` or
    ``DB_POOL_SIZE`` (with ``prefix`` prepended to each candidate).
    """

    def __init__(
        self,
        name: str = "environ",
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = "",
    ):
        super().__init__(name)
        self._environ = environ if environ is not None else os.environ
        self.prefix = prefix

    def _candidates(self, key: str) -> List[str]:
        underscored = key.replace(".", "_")
        candidates = [
            f"{self.prefix}{key}",
            f"{self.prefix}{underscored}",
            f"{self.prefix}{underscored.replace('-', '_').upper()}",
        ]
        # Preserve order, drop duplicates
        return list(dict.fromkeys(candidates))

    def get(self, key: str) -> Optional[str]:
        for candidate in self._candidates(key):
            value = self._environ.get(candidate)
            if value is not None:
                return value
        return None

    def keys(self) -> List[str]:
        return [key for key in self._environ if key.startswith(self.prefix)]


# =============================================================================
# FILE SOURCES
# =============================================================================

def flatten(data: Any, prefix: str = "") -> Dict[str, Any]:
    """Flatten nested dicts/lists into ``a.b[0].c`` style keys."""
    result: Dict[str, Any] = {}

    if isinstance(data, dict):
        for key, value in data.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            result.update(flatten(value, path))
    elif isinstance(data, list):
        for i, item in enumerate(data):
            result.update(flatten(item, f"{prefix}[{i}]"))
    elif prefix:
        result[prefix] = data

    return result


def _detect_format(filepath: Path) -> ConfigFormat:
    """Detect configuration format from file extension, then content."""
    ext = filepath.suffix.lower()
    if ext == '.json':
        return ConfigFormat.JSON
    elif ext in {'.yaml', '.yml'}:
        return ConfigFormat.YAML
    elif ext in {'.ini', '.conf', '.cfg'}:
        return ConfigFormat.INI
    elif ext == '.properties':
        return ConfigFormat.PROPERTIES

    content = filepath.read_text(encoding="utf-8").lstrip()
    if content.startswith('{'):
        return ConfigFormat.JSON
    if content.startswith('['):
        return ConfigFormat.INI
    first_line = content.split('\n', 1)[0]
    if ':' in first_line and '=' not in first_line:
        return ConfigFormat.YAML
    return ConfigFormat.PROPERTIES


def parse_properties(content: str) -> Dict[str, str]:
    """Parse ``key=value`` / ``key: value`` lines with ``#``/``!`` comments."""
    result: Dict[str, str] = {}
    pending = ""

    for line in content.splitlines():
        stripped = line.strip()
        if not pending and (not stripped or stripped[0] in "#!"):
            continue

        # Trailing backslash continues the logical line
        if stripped.endswith("\\") and not stripped.endswith("\\\\"):
            pending += stripped[:-1]
            continue
        logical = pending + stripped
        pending = ""

        separators = [i for i in (logical.find("="), logical.find(":")) if i >= 0]
        if not separators:
            result[logical] = ""
            continue
        index = min(separators)
        result[logical[:index].strip()] = logical[index + 1:].strip()

    if pending:
        result[pending] = ""
    return result


def _parse_ini(content: str) -> Dict[str, Any]:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str
    parser.read_string(content)
    return {section: dict(parser[section]) for section in parser.sections()}


def load_file(filepath: Union[str, Path], fmt: ConfigFormat = ConfigFormat.AUTO) -> Dict[str, Any]:
    """
    Load a configuration file into a flat dictionary.

    Args:
        filepath: Path to configuration file
        fmt: File format (auto-detected if AUTO)

    Returns:
        Flat ``{dotted.key: value}`` dictionary
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    if fmt == ConfigFormat.AUTO:
        fmt = _detect_format(filepath)

    content = filepath.read_text(encoding="utf-8")

    try:
        if fmt == ConfigFormat.JSON:
            data = json.loads(content)
        elif fmt == ConfigFormat.YAML:
            data = yaml.safe_load(content) or {}
        elif fmt == ConfigFormat.INI:
            data = _parse_ini(content)
        elif fmt == ConfigFormat.PROPERTIES:
            return parse_properties(content)
        else:
            raise ConfigError(f"Unsupported format: {fmt}")
    except (json.JSONDecodeError, yaml.YAMLError, configparser.Error) as e:
        logger.error(f"Failed to parse config file {filepath}: {e}")
        raise ConfigError(f"Cannot parse {fmt.value} config file {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {filepath} must contain a mapping at the top level")

    return flatten(data)


class FileConfigSource(MapConfigSource):
    """Source loaded once from a configuration file."""

    def __init__(self, name: str, mapping: Mapping[str, Any], path: Optional[Path] = None):
        super().__init__(name, mapping)
        self.path = path

    @classmethod
    def from_file(
        cls,
        filepath: Union[str, Path],
        fmt: ConfigFormat = ConfigFormat.AUTO,
        name: Optional[str] = None,
    ) -> "FileConfigSource":
        filepath = Path(filepath)
        data = load_file(filepath, fmt)
        logger.debug(f"Loaded {len(data)} properties from {filepath}")
        return cls(name or f"file:{filepath}", data, path=filepath)
