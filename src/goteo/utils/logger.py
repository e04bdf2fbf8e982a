"""Logger namespace for goteo.

Every module logs through ``get_logger(__name__)`` so all records land under
the ``goteo`` logger. What each module reports:

    goteo.accumulator  DEBUG    chunk flushes, stream shrink resets
    goteo.scanner.core DEBUG    forced boundaries from the size fallback
    goteo.pipeline     DEBUG    merges into the last block
                       WARNING  converter/sanitizer failures (with traceback)
    goteo.session      DEBUG    explicit and detected resets

No handlers are installed. To watch a stream flush and merge:

    >>> import logging
    >>> logging.basicConfig()
    >>> logging.getLogger("goteo").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "goteo"


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name`` under the goteo namespace.

    Example:
        >>> get_logger("pipeline").name
        'goteo.pipeline'
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
