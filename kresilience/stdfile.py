"""Checkpoint storage in plain binary files, one file per label and version."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .config import Config
from .context import ContextBase

if TYPE_CHECKING:
    from .checkpoint import Member

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def versionless_filename(filename: str, label: str) -> str:
    """The file name prefix shared by every version of ``label``."""
    return f"{filename}.{label}"


def full_filename(filename: str, label: str, version: int) -> str:
    """The file holding version ``version`` of ``label``."""
    return f"{versionless_filename(filename, label)}.{version}"


class StdFileBackend:
    """Writes each checkpoint as the members' serialized data, one after another."""

    def __init__(self, context: ContextBase, filename: str) -> None:
        self._context = context
        self._filename = filename
        self._registered: set[str] = set()

    @property
    def registered(self) -> frozenset[str]:
        """Names of the members seen by :meth:`register_hashes` since the last reset."""
        return frozenset(self._registered)

    def checkpoint(self, label: str, version: int, members: Sequence["Member"]) -> None:
        """Write the members to the checkpoint file; failures are logged, not raised."""
        path = full_filename(self._filename, label, version)
        try:
            with open(path, "wb") as stream:
                for member in members:
                    member.serialize(stream)
        except Exception:
            logger.warning("could not write checkpoint %s", path, exc_info=True)

    def restart_available(self, label: str, version: int) -> bool:
        return Path(full_filename(self._filename, label, version)).exists()

    def latest_version(self, label: str) -> int:
        """The highest version found on disk for ``label``, or -1."""
        base = Path(versionless_filename(self._filename, label))
        name = base.name
        directory = base.absolute().parent
        try:
            entries = list(directory.iterdir())
        except OSError:
            return -1

        result = -1
        for entry in entries:
            if not entry.is_file() or entry.stem != name:
                continue
            match = _LEADING_INT.match(entry.suffix[1:])
            if match:
                result = max(result, int(match.group()))
        return result

    def restart(self, label: str, version: int, members: Sequence["Member"]) -> None:
        """Read the members back from the checkpoint file; failures are logged, not raised."""
        path = full_filename(self._filename, label, version)
        try:
            with open(path, "rb") as stream:
                for member in members:
                    member.deserialize(stream)
        except Exception:
            logger.warning("could not read checkpoint %s", path, exc_info=True)

    def reset(self) -> None:
        """Forget the members registered so far."""
        self._registered.clear()

    def register_hashes(self, members: Sequence["Member"]) -> None:
        """Record the members' names; the files need no further registration."""
        self._registered.update(member.name for member in members)


class StdFileContext(ContextBase):
    """A context storing checkpoints in files named by ``backends.stdfile.file``."""

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._filename = config["backends"]["stdfile"]["file"].as_type(str)
        self._backend = StdFileBackend(self, self._filename)
        self._aliases: dict[str, str] = {}

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def backend(self) -> StdFileBackend:
        return self._backend

    @property
    def aliases(self) -> dict[str, str]:
        """A copy of the alias-to-original mapping recorded by :meth:`register_alias`."""
        return dict(self._aliases)

    def register_hashes(self, members: Sequence["Member"]) -> None:
        self._backend.register_hashes(members)

    def restart_available(self, label: str, version: int) -> bool:
        return self._backend.restart_available(label, version)

    def restart(self, label: str, version: int, members: Sequence["Member"]) -> None:
        self._backend.restart(label, version, members)

    def checkpoint(self, label: str, version: int, members: Sequence["Member"]) -> None:
        self._backend.checkpoint(label, version, members)

    def latest_version(self, label: str) -> int:
        return self._backend.latest_version(label)

    def register_alias(self, original: str, alias: str) -> None:
        """Record the alias; file storage does not use it when reading or writing."""
        self._aliases[alias] = original

    def reset(self) -> None:
        self._backend.reset()