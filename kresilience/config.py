"""Hierarchical configuration: nested objects holding float, string or bool values."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from os import PathLike
from typing import Any, Optional, Union

Scalar = Union[float, str, bool]


class ConfigKeyError(LookupError):
    """Raised when a key is missing or looked up in something that is not an object."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key error: {key}")
        self.key = key


class ConfigValueError(ValueError):
    """Raised when an entry is not a value or holds a value of another type."""

    def __init__(self) -> None:
        super().__init__("value error")


def _normalise_scalar(value: Any) -> Scalar:
    if isinstance(value, (bool, str, float)):
        return value
    if isinstance(value, int):
        return float(value)
    raise TypeError(f"unsupported configuration value type: {type(value).__name__}")


def _parse_json(data: Mapping[str, Any]) -> "ConfigEntry":
    """Build an object entry from decoded JSON, keeping objects, strings and numbers."""
    entry = ConfigEntry()
    for key, item in data.items():
        if isinstance(item, Mapping):
            entry.emplace(key, _parse_json(item))
        elif isinstance(item, str):
            entry.emplace(key, item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            entry.emplace(key, float(item))
    return entry


class ConfigEntry:
    """A configuration node: either an object of named entries or a single value."""

    __slots__ = ("_children", "_value")

    def __init__(self, value: Any = None) -> None:
        self._children: Optional[dict[str, ConfigEntry]] = {}
        self._value: Optional[Scalar] = None
        if value is not None:
            self.set(value)

    def set(self, value: Any) -> None:
        """Replace this entry with a value (or, given a mapping, with an object)."""
        if isinstance(value, ConfigEntry):
            self._children = None if value._children is None else dict(value._children)
            self._value = value._value
        elif isinstance(value, Mapping):
            parsed = _parse_json(value)
            self._children = parsed._children
            self._value = None
        else:
            self._value = _normalise_scalar(value)
            self._children = None

    def _require_object(self, key: str) -> dict[str, "ConfigEntry"]:
        if self._children is None:
            raise ConfigKeyError(key)
        return self._children

    def __getitem__(self, key: str) -> "ConfigEntry":
        children = self._require_object(key)
        try:
            return children[key]
        except KeyError:
            raise ConfigKeyError(key) from None

    def __setitem__(self, key: str, value: Any) -> None:
        if self._children is None:
            self._children = {}
            self._value = None
        self._children[key] = value if isinstance(value, ConfigEntry) else ConfigEntry(value)

    def __contains__(self, key: object) -> bool:
        return self._children is not None and key in self._children

    def __iter__(self) -> Iterator[str]:
        return iter(self._children or {})

    def get(self, key: str) -> Optional["ConfigEntry"]:
        """Return the child named ``key``, or None if this object lacks it."""
        return self._require_object(key).get(key)

    def emplace(self, key: str, value: Any) -> None:
        """Add a child unless one with that key exists already."""
        children = self._require_object(key)
        if key not in children:
            children[key] = value if isinstance(value, ConfigEntry) else ConfigEntry(value)

    def as_type(self, kind: type) -> Scalar:
        """Return the held value, which must be exactly of type ``kind``."""
        if self._children is not None or type(self._value) is not kind:
            raise ConfigValueError()
        return self._value

    def is_value(self) -> bool:
        return self._children is None

    def is_object(self) -> bool:
        return self._children is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigEntry):
            return NotImplemented
        return self._children == other._children and self._value == other._value

    def __repr__(self) -> str:
        if self._children is None:
            return f"ConfigEntry({self._value!r})"
        return f"ConfigEntry({self._children!r})"


class Config:
    """The root of a configuration, optionally read from a JSON file."""

    def __init__(self, path: Union[str, PathLike, None] = None) -> None:
        self._root = ConfigEntry()
        if path is not None:
            with open(path, encoding="utf-8") as stream:
                data = json.load(stream)
            if not isinstance(data, Mapping):
                raise ConfigValueError()
            self._root = _parse_json(data)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Config":
        """Build a configuration from nested dictionaries."""
        config = cls()
        config._root = _parse_json(data)
        return config

    @property
    def root(self) -> ConfigEntry:
        return self._root

    def __getitem__(self, key: str) -> ConfigEntry:
        return self._root[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._root[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._root

    def get(self, key: str) -> Optional[ConfigEntry]:
        return self._root.get(key)

    def set(self, key: str, value: Any) -> None:
        """Set the top-level entry ``key`` to ``value``."""
        self._root[key] = value