"""Creation of checkpoint contexts from a configuration."""

from __future__ import annotations

from os import PathLike
from typing import Callable, Optional, Union

from .config import Config
from .context import ContextBase
from .stdfile import StdFileContext

_BACKENDS: dict[str, Callable[[Config], ContextBase]] = {
    "stdfile": StdFileContext,
}


def make_context(config: Union[Config, str, PathLike]) -> Optional[ContextBase]:
    """Build the context named by the ``backend`` entry, or None if it is unknown.

    ``config`` is either a Config or the path of a JSON configuration file.
    """
    if not isinstance(config, Config):
        config = Config(config)
    factory = _BACKENDS.get(config["backend"].as_type(str))
    if factory is None:
        return None
    return factory(config)