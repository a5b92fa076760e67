from __future__ import annotations

import sys
import traceback


def log_exception(logger, context: str, exc: Exception) -> None:
    """Report an exception raised inside a Tk callback to the logger and stderr."""
    try:
        logger("%s: %s", context, exc)
    except Exception:
        pass
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
