"""Checkpoint contexts: configuration, default filter and the backend interface."""

from __future__ import annotations

import abc
from collections.abc import Sequence
from typing import TYPE_CHECKING, Callable

from .config import Config
from .filters import DefaultFilter, NthIterationFilter, TimeFilter

if TYPE_CHECKING:
    from .checkpoint import Member

FilterFunc = Callable[[int], bool]


def _filter_from_config(config: Config) -> FilterFunc:
    """Build the default checkpoint filter named by the ``filter`` entry, if any."""
    spec = config.get("filter")
    if spec is None:
        return DefaultFilter()

    kind = spec["type"].as_type(str)
    if kind == "time":
        seconds = int(spec["interval"].as_type(float))
        return TimeFilter(float(seconds))
    if kind == "iteration":
        return NthIterationFilter(int(spec["interval"].as_type(float)))
    if kind == "default":
        return DefaultFilter()
    raise ValueError("invalid filter specified")


class ContextBase(abc.ABC):
    """Holds the configuration and forwards checkpoint work to a storage backend."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._default_filter = _filter_from_config(config)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def default_filter(self) -> FilterFunc:
        """The filter used when a checkpoint call names none."""
        return self._default_filter

    @abc.abstractmethod
    def register_hashes(self, members: Sequence["Member"]) -> None:
        """Make the backend aware of the members before a checkpoint or restart."""

    @abc.abstractmethod
    def restart_available(self, label: str, version: int) -> bool:
        """Whether a checkpoint of ``label`` at ``version`` can be restored."""

    @abc.abstractmethod
    def restart(self, label: str, version: int, members: Sequence["Member"]) -> None:
        """Load the members' data from the checkpoint of ``label`` at ``version``."""

    @abc.abstractmethod
    def checkpoint(self, label: str, version: int, members: Sequence["Member"]) -> None:
        """Store the members' data as the checkpoint of ``label`` at ``version``."""

    @abc.abstractmethod
    def latest_version(self, label: str) -> int:
        """The newest stored version of ``label``, or -1 if there is none."""

    @abc.abstractmethod
    def register_alias(self, original: str, alias: str) -> None:
        """Treat the member named ``alias`` as the one named ``original``."""

    @abc.abstractmethod
    def reset(self) -> None:
        """Forget backend state so the context can start afresh."""