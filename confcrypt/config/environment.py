"""
Configuration environment.

The environment answers property lookups by consulting an ordered registry
of ConfigSource objects. Index 0 has the highest precedence: the first
source holding a value for a key wins.
"""

import logging
from typing import Iterable, Iterator, List, Mapping, Optional, Union
from pathlib import Path

from ..errors import MissingRequiredConfig
from .sources import (
    ConfigSource,
    EnvironmentVariableSource,
    FileConfigSource,
    MapConfigSource,
)

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Ordered, name-unique list of configuration sources."""

    def __init__(self, sources: Iterable[ConfigSource] = ()):
        self._sources: List[ConfigSource] = []
        for source in sources:
            self.add_last(source)

    def __iter__(self) -> Iterator[ConfigSource]:
        return iter(list(self._sources))

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, name: str) -> bool:
        return self._index_of(name) is not None

    def __repr__(self) -> str:
        return f"SourceRegistry({self.names()!r})"

    def _index_of(self, name: str) -> Optional[int]:
        for i, source in enumerate(self._sources):
            if source.name == name:
                return i
        return None

    def _require_index(self, name: str) -> int:
        index = self._index_of(name)
        if index is None:
            raise KeyError(f"No configuration source named {name!r}")
        return index

    def _discard(self, name: str) -> None:
        index = self._index_of(name)
        if index is not None:
            del self._sources[index]

    def names(self) -> List[str]:
        return [source.name for source in self._sources]

    def get(self, name: str) -> Optional[ConfigSource]:
        index = self._index_of(name)
        return None if index is None else self._sources[index]

    def add_first(self, source: ConfigSource) -> None:
        """Add with highest precedence."""
        self._discard(source.name)
        self._sources.insert(0, source)

    def add_last(self, source: ConfigSource) -> None:
        """Add with lowest precedence."""
        self._discard(source.name)
        self._sources.append(source)

    def add_before(self, relative_name: str, source: ConfigSource) -> None:
        """Add with precedence just above ``relative_name``."""
        if source.name == relative_name:
            raise ValueError(f"Source {relative_name!r} cannot be added relative to itself")
        self._require_index(relative_name)
        self._discard(source.name)
        self._sources.insert(self._require_index(relative_name), source)

    def add_after(self, relative_name: str, source: ConfigSource) -> None:
        """Add with precedence just below ``relative_name``."""
        if source.name == relative_name:
            raise ValueError(f"Source {relative_name!r} cannot be added relative to itself")
        self._require_index(relative_name)
        self._discard(source.name)
        self._sources.insert(self._require_index(relative_name) + 1, source)

    def replace(self, name: str, source: ConfigSource) -> None:
        """Put ``source`` in the slot currently held by ``name``."""
        self._sources[self._require_index(name)] = source

    def remove(self, name: str) -> Optional[ConfigSource]:
        index = self._index_of(name)
        if index is None:
            return None
        return self._sources.pop(index)


class ConfigEnvironment:
    """Property lookups across an ordered set of configuration sources."""

    def __init__(self, sources: Union[SourceRegistry, Iterable[ConfigSource], None] = None):
        if isinstance(sources, SourceRegistry):
            self.sources = sources
        else:
            self.sources = SourceRegistry(sources or ())

    @classmethod
    def from_defaults(
        cls,
        files: Iterable[Union[str, Path]] = (),
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> "ConfigEnvironment":
        """
        Build the conventional environment.

        Precedence, highest first: explicit overrides, environment variables,
        then files (a later file overrides an earlier one).
        """
        registry = SourceRegistry()
        if overrides:
            registry.add_last(MapConfigSource("overrides", overrides))
        registry.add_last(EnvironmentVariableSource(environ=environ))
        for path in reversed(list(files)):
            registry.add_last(FileConfigSource.from_file(path))
        logger.debug(f"Configuration sources: {registry.names()}")
        return cls(registry)

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for source in self.sources:
            value = source.get(key)
            if value is not None:
                return value
        return default

    def get_required_property(self, key: str) -> str:
        value = self.get_property(key)
        if value is None:
            raise MissingRequiredConfig(key)
        return value

    def contains_property(self, key: str) -> bool:
        return any(source.contains(key) for source in self.sources)

    def keys(self) -> List[str]:
        """All keys across all sources, in precedence order, without duplicates."""
        seen = {}
        for source in self.sources:
            for key in source.keys():
                seen.setdefault(key, None)
        return list(seen)

    def unwrapped(self) -> "ConfigEnvironment":
        """
        View of this environment that reads the raw sources.

        Any source exposing a ``delegate`` (a decorating wrapper) is replaced
        by the source it decorates. The registry of this environment is not
        modified.
        """
        raw_sources = []
        for source in self.sources:
            while hasattr(source, "delegate"):
                source = source.delegate
            raw_sources.append(source)
        return ConfigEnvironment(raw_sources)

    def __repr__(self) -> str:
        return f"ConfigEnvironment(sources={self.sources.names()!r})"
