"""Automatic checkpointing of a region of work and the data it touches."""

from __future__ import annotations

import inspect
import logging
import pickle
import time
from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet
from typing import Any, BinaryIO, Callable, Optional

from .context import ContextBase

logger = logging.getLogger(__name__)

_PICKLE_PROTOCOL = 4


def _restorable_in_place(value: Any) -> bool:
    return isinstance(value, (MutableSequence, MutableMapping, MutableSet))


class Member:
    """A named piece of data that is written to and read back from checkpoints."""

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Member):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Member({self.name!r}, {self.value!r})"

    def serialize(self, stream: BinaryIO) -> None:
        """Write the value to a binary stream."""
        pickle.dump(self.value, stream, protocol=_PICKLE_PROTOCOL)

    def deserialize(self, stream: BinaryIO) -> Any:
        """Read the value back, updating mutable containers in place."""
        restored = pickle.load(stream)
        target = self.value
        if isinstance(target, MutableSequence) and isinstance(restored, MutableSequence):
            target[:] = restored
        elif isinstance(target, MutableMapping) and isinstance(restored, MutableMapping):
            target.clear()
            target.update(restored)
        elif isinstance(target, MutableSet) and isinstance(restored, MutableSet):
            target.clear()
            target |= restored
        else:
            self.value = restored
        return self.value


def latest_version(ctx: ContextBase, label: str) -> int:
    """The newest stored version of ``label`` in ``ctx``, or -1."""
    return ctx.latest_version(label)


def _collect(found: dict[str, Member], name: str, value: Any) -> None:
    if isinstance(value, Member):
        found.setdefault(value.name, value)
    elif _restorable_in_place(value):
        found.setdefault(name, Member(name, value))


def _captured(fun: Callable[[], Any]) -> Mapping[str, Any]:
    if inspect.isfunction(fun) or inspect.ismethod(fun):
        try:
            return inspect.getclosurevars(fun).nonlocals
        except ValueError:
            # A closure cell that was never filled.
            return {}
    if not inspect.isroutine(fun) and hasattr(fun, "__dict__"):
        return vars(fun)
    return {}


def autodetect_members(fun: Callable[[], Any]) -> list[Member]:
    """Find the data a callable carries with it that can be checkpointed.

    Closure variables of a function, or the attributes of a callable object,
    count when they are Members or mutable containers that can be restored
    in place.
    """
    found: dict[str, Member] = {}
    for name, value in _captured(fun).items():
        _collect(found, name, value)
    return list(found.values())


def checkpoint(
    ctx: ContextBase,
    label: str,
    iteration: int,
    fun: Callable[[], Any],
    *args: Member,
    filter: Optional[Callable[[int], bool]] = None,
) -> None:
    """Run ``fun`` and checkpoint its data, or restore the data instead if possible.

    Explicit members are given as positional arguments after ``fun``; the
    data captured by ``fun`` is found automatically. Iterations rejected by
    the filter (the context's default unless given) simply run ``fun``.
    """
    for arg in args:
        if not isinstance(arg, Member):
            raise TypeError(f"explicit checkpoint members must be Member, not {type(arg).__name__}")

    accept = filter if filter is not None else ctx.default_filter
    if not accept(iteration):
        fun()
        return

    found: dict[str, Member] = {}
    for member in args:
        found.setdefault(member.name, member)
    for member in autodetect_members(fun):
        found.setdefault(member.name, member)
    members = sorted(found.values(), key=lambda m: m.name)

    ctx.register_hashes(members)
    if ctx.restart_available(label, iteration):
        ctx.restart(label, iteration, members)
        return

    fun()
    logger.info("[%s] initiating checkpoint", time.strftime("%c"))
    ctx.checkpoint(label, iteration, members)