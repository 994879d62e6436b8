import logging
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_compensation(action: Callable[[], T], undo: Callable[[], None]) -> T:
    """Run ``action``; if it raises, run ``undo`` and re-raise the original error.

    A failing ``undo`` is logged and never replaces the original exception.
    """
    try:
        return action()
    except Exception:
        try:
            undo()
        except Exception as undo_error:
            logger.error(f"Compensating action failed: {undo_error}")
        raise
