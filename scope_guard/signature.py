"""Checks that a callable is usable as a guard action.

A valid action can be called with no arguments and produces no value. Python
has no way to enforce that before the program runs, so the check happens
when the guard is created: callables that take required arguments, that are
classes, or that are declared (by annotation or by being a generator or
coroutine function) to produce a value are rejected there, before anything
is deferred. Unannotated callables are given the benefit of the doubt.
"""

import functools
import inspect
import logging
from collections.abc import Callable, Iterator
from typing import Any, Never, NoReturn

from scope_guard.exceptions import InvalidActionSignatureError

LOG = logging.getLogger(__name__)

_VOID_ANNOTATION_NAMES = frozenset(("None", "NoneType", "NoReturn", "Never"))


def _signature(action: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(action)
    except (TypeError, ValueError):
        # some builtins do not expose a signature
        return None


def _call_targets(action: Callable[..., Any]) -> Iterator[Callable[..., Any]]:
    yield action
    if not (
        inspect.isfunction(action)
        or inspect.ismethod(action)
        or inspect.isbuiltin(action)
        or isinstance(action, functools.partial)
    ):
        call = getattr(action, "__call__", None)
        if call is not None:
            yield call


def _produces_deferred_value(action: Callable[..., Any]) -> bool:
    return any(
        inspect.iscoroutinefunction(t)
        or inspect.isasyncgenfunction(t)
        or inspect.isgeneratorfunction(t)
        for t in _call_targets(action)
    )


def _is_void_annotation(annotation: Any) -> bool:
    if annotation is inspect.Signature.empty:
        return True
    if isinstance(annotation, str):
        # postponed evaluation, e.g. "None" or "typing.NoReturn"
        return annotation.rsplit(".", 1)[-1] in _VOID_ANNOTATION_NAMES
    return (
        annotation is None
        or annotation is type(None)
        or annotation is NoReturn
        or annotation is Never
    )


def returns_void(action: Callable[..., Any]) -> bool:
    """Whether calling action is declared to produce no value."""
    if inspect.isclass(action) or _produces_deferred_value(action):
        return False
    sig = _signature(action)
    if sig is None:
        return True
    return _is_void_annotation(sig.return_annotation)


def validate_callable(func: Any) -> inspect.Signature | None:
    """Check that func can be run with no arguments, whatever it returns.

    Used for callables that get wrapped into an action, where the wrapper
    takes care of the result.
    """
    if not callable(func):
        raise InvalidActionSignatureError(func, "not callable")
    if _produces_deferred_value(func):
        raise InvalidActionSignatureError(
            func, "calling it produces a coroutine or generator instead of running"
        )

    sig = _signature(func)
    if sig is None:
        LOG.debug(f"no signature available for {func!r}, accepting it unchecked")
        return None

    try:
        sig.bind()
    except TypeError:
        raise InvalidActionSignatureError(
            func, f"must be callable without arguments, signature is {sig}"
        ) from None
    return sig


def validate_action(action: Any) -> None:
    """Raise InvalidActionSignatureError unless action is a valid guard action."""
    if inspect.isclass(action):
        raise InvalidActionSignatureError(
            action, "calling a class produces an instance"
        )
    sig = validate_callable(action)
    if sig is not None and not _is_void_annotation(sig.return_annotation):
        raise InvalidActionSignatureError(
            action,
            f"must not return a value, declared to return {sig.return_annotation!r}",
        )
