"""Inline scope-exit declarations.

Cleanup is written right next to the acquisition, without naming a guard:

    with Scope() as scope:
        fd = os.open(path, os.O_RDONLY)

        @scope.defer
        def _() -> None:
            os.close(fd)

        ...

or, for a whole function, with the defer decorator:

    @defer
    def run(path: str, defer: Callable | None = None) -> None:
        lock.acquire()
        defer(lock.release)
        ...

Actions are closures, so they see the values captured variables hold when
the scope is left, not when the action was declared. Those variables have
to stay alive until then.
"""

import itertools
import logging
from collections.abc import Callable
from contextlib import ExitStack
from functools import wraps
from types import TracebackType
from typing import Any, Self

from scope_guard.exceptions import ScopeClosedError
from scope_guard.guard import ScopeGuard, make_guard

LOG = logging.getLogger(__name__)

_slot_counter = itertools.count()


def anonymous_variable(prefix: str = "SCOPE_EXIT") -> str:
    """Return a name no other call in this process returns."""
    return f"{prefix}{next(_slot_counter)}"


class Scope:
    """Owns the anonymous guards declared inside a with block.

    The guards are left in reverse declaration order when the block ends,
    whether it ends normally, by return or by an exception.
    """

    def __init__(self) -> None:
        self._stack = ExitStack()
        self._guards: dict[str, ScopeGuard] = {}
        self._closed = False

    @property
    def guards(self) -> dict[str, ScopeGuard]:
        """Guards registered so far, by slot. Emptied when the scope is left."""
        return dict(self._guards)

    def defer(self, action: Callable[[], None]) -> ScopeGuard:
        """Run action when the scope is left. Usable as a decorator."""
        self._check_open()
        return self._register(make_guard(action))

    def adopt(self, guard: ScopeGuard) -> ScopeGuard:
        """Move an existing guard into the scope."""
        self._check_open()
        return self._register(guard.take())

    def _check_open(self) -> None:
        if self._closed:
            raise ScopeClosedError("can not defer to a scope that was already left")

    def _register(self, guard: ScopeGuard) -> ScopeGuard:
        slot = anonymous_variable()
        self._guards[slot] = guard
        self._stack.push(guard)
        LOG.debug(f"registered {guard!r} as {slot}")
        return guard

    def close(self) -> None:
        self.__exit__(None, None, None)

    def __enter__(self) -> Self:
        self._stack.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool:
        self._closed = True
        try:
            return self._stack.__exit__(exc_type, exc_value, traceback)
        finally:
            self._guards.clear()


def defer(func: Callable) -> Callable:
    """Defer code execution until the surrounding function returns.
    Useful for registering cleanup work.

    The decorated function receives a `defer` keyword argument; each call
    to it registers an action and returns its guard, which can be dismissed.
    """

    @wraps(func)
    def func_wrapper(*args: Any, **kwargs: Any) -> Any:
        with Scope() as scope:
            return func(*args, defer=scope.defer, **kwargs)

    return func_wrapper
