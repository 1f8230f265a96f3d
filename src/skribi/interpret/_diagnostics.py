"""Diagnostic reporting: the top-level formatting-and-halt behaviour.

Library code raises ``SkribiError``.  The program driver wraps statement
evaluation in ``halt_on_error()``; the first error is printed as a single
diagnostic line and the process exits with status 1.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn, TextIO

from skribi.errors import SkribiError

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1


def format_diagnostic(error: SkribiError) -> str:
    """Render *error* as the one-line message shown to the user."""
    if error.line is None:
        return f"Error: {error.message}"
    return f"Error on line {error.line}: {error.message}"


def fatal(error: SkribiError, stream: TextIO | None = None) -> NoReturn:
    """Print the diagnostic for *error* and stop the program."""
    text = format_diagnostic(error)
    logger.debug("halting: %s", text)
    print(text, file=stream if stream is not None else sys.stderr)
    raise SystemExit(EXIT_FAILURE) from error


@contextmanager
def halt_on_error(stream: TextIO | None = None) -> Iterator[None]:
    """Turn any ``SkribiError`` raised in the block into ``fatal``."""
    try:
        yield
    except SkribiError as exc:
        fatal(exc, stream)
