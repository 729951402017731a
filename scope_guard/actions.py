import logging
from collections.abc import Callable
from typing import Any

from scope_guard.config import get_settings
from scope_guard.signature import validate_callable

LOG = logging.getLogger(__name__)


def log_errors(
    action: Callable[[], Any],
    logger: logging.Logger | None = None,
    message: str = "guard action failed",
) -> Callable[[], None]:
    """Wrap action so that a failure is logged instead of raised.

    A guard lets exceptions from its action escape, even while another
    exception is already unwinding. Wrap actions that can fail with this.
    """
    validate_callable(action)
    log = logger or LOG

    def wrapper() -> None:
        try:
            action()
        except Exception:
            log.log(
                get_settings().failed_action_level,
                f"{message}: {action!r}",
                exc_info=True,
            )

    return wrapper


def discard_result(func: Callable[[], Any]) -> Callable[[], None]:
    """Adapt a value-returning callable into a guard action."""
    validate_callable(func)

    def wrapper() -> None:
        func()

    return wrapper
