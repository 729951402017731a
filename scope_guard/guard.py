"""Deferred-action guard.

A ScopeGuard holds one zero-argument action and runs it exactly once when
the scope owning the guard is left, unless it was dismissed first or its
ownership was moved to another guard with take().

    def read_header(path):
        fd = os.open(path, os.O_RDONLY)
        with make_guard(lambda: os.close(fd)):
            data = os.read(fd, 1024)
            if not data:
                return None
            return parse(data)

Guards can't be copied: two owners of one cleanup would run it twice.
"""

import logging
import warnings
from collections.abc import Callable
from enum import Enum
from types import TracebackType
from typing import Any, NoReturn, Self

from scope_guard.config import get_settings
from scope_guard.exceptions import GuardConstructionError, GuardCopyError
from scope_guard.signature import validate_action

LOG = logging.getLogger(__name__)

_CONSTRUCT = object()


class GuardState(Enum):
    ARMED = "armed"
    DISMISSED = "dismissed"
    MOVED = "moved"
    FIRED = "fired"


class ScopeGuard:
    __slots__ = ("_action", "_state")

    def __init__(
        self,
        action: Callable[[], None],
        dismissed: bool = False,
        *,
        _token: object = None,
    ) -> None:
        # only make_guard() and take() may construct guards
        if _token is not _CONSTRUCT:
            raise GuardConstructionError(
                "ScopeGuard can not be constructed directly, use make_guard()"
            )
        self._action: Callable[[], None] | None = action
        self._state = GuardState.DISMISSED if dismissed else GuardState.ARMED

    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def dismissed(self) -> bool:
        return self._state in {GuardState.DISMISSED, GuardState.MOVED}

    @property
    def armed(self) -> bool:
        return self._state is GuardState.ARMED

    def dismiss(self) -> None:
        """Cancel the pending action. Safe to call any number of times."""
        if self._state is GuardState.ARMED:
            LOG.debug(f"dismissing guard for {self._action!r}")
            self._state = GuardState.DISMISSED

    def take(self) -> "ScopeGuard":
        """Move the action and its dismissed flag into a new guard.

        This guard is left empty and will never run anything.
        """
        action = self._action
        dismissed = self._state is not GuardState.ARMED
        if action is None or self._state is GuardState.FIRED:
            # nothing left to own, hand out an inert guard
            action, dismissed = _noop, True
        self._action = None
        if self._state is not GuardState.FIRED:
            self._state = GuardState.MOVED
        LOG.debug(f"moving guard for {action!r}")
        return ScopeGuard(action, dismissed, _token=_CONSTRUCT)

    def close(self) -> None:
        """End the guard's lifetime now, running the action if still armed."""
        if self._state is not GuardState.ARMED:
            return
        action = self._action
        self._state = GuardState.FIRED
        self._action = None
        LOG.debug(f"running guard action {action!r}")
        result = action()  # type: ignore[misc]
        if result is not None and get_settings().warn_on_return_value:
            LOG.warning(
                f"guard action {action!r} returned {result!r}, the value is discarded"
            )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __copy__(self) -> NoReturn:
        raise GuardCopyError("ScopeGuard can not be copied, use take() to move it")

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise GuardCopyError("ScopeGuard can not be copied, use take() to move it")

    def __reduce_ex__(self, protocol: Any) -> NoReturn:
        raise GuardCopyError("ScopeGuard can not be pickled")

    def __del__(self) -> None:
        # never runs the action, collection time is not a scope exit
        if getattr(self, "_state", None) is GuardState.ARMED:
            warnings.warn(
                f"guard for {self._action!r} was never closed, its action did not run",
                ResourceWarning,
                source=self,
            )

    def __repr__(self) -> str:
        return f"<ScopeGuard {self._state.value} action={self._action!r}>"


def _noop() -> None:
    pass


def make_guard(action: Callable[[], None]) -> ScopeGuard:
    """Create an armed guard owning action.

    action may be a function, lambda, functools.partial or any object with
    a __call__ that takes no arguments and returns nothing. Anything else is
    rejected here with InvalidActionSignatureError, before the guard exists.
    """
    validate_action(action)
    LOG.debug(f"creating guard for {action!r}")
    return ScopeGuard(action, _token=_CONSTRUCT)
