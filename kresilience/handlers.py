"""Process-wide handler for unrecoverable data corruption."""

from __future__ import annotations

from typing import Callable

Handler = Callable[[int], None]

_MESSAGE = (
    "Resilience majority voting failed because each execution obtained a "
    "differing value."
)


class UnrecoverableDataCorruption(RuntimeError):
    """Raised when majority voting cannot agree on a value."""


def default_unrecoverable_data_corruption_handler(index: int) -> None:
    """Abort by raising UnrecoverableDataCorruption."""
    error = UnrecoverableDataCorruption(_MESSAGE)
    error.index = index
    raise error


_registry: dict[str, Handler] = {"handler": default_unrecoverable_data_corruption_handler}


def set_unrecoverable_data_corruption_handler(handler: Handler) -> None:
    """Install the handler called when corruption cannot be recovered from."""
    if not callable(handler):
        raise TypeError(f"handler must be callable, not {type(handler).__name__}")
    _registry["handler"] = handler


def get_unrecoverable_data_corruption_handler() -> Handler:
    """The handler currently installed."""
    return _registry["handler"]