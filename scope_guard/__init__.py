from scope_guard.actions import discard_result, log_errors
from scope_guard.exceptions import (
    ConfigError,
    GuardConstructionError,
    GuardCopyError,
    InvalidActionSignatureError,
    ScopeClosedError,
    ScopeGuardError,
)
from scope_guard.guard import GuardState, ScopeGuard, make_guard
from scope_guard.scope import Scope, anonymous_variable, defer
from scope_guard.signature import returns_void, validate_action, validate_callable

__all__ = [
    "ConfigError",
    "GuardConstructionError",
    "GuardCopyError",
    "GuardState",
    "InvalidActionSignatureError",
    "Scope",
    "ScopeClosedError",
    "ScopeGuard",
    "ScopeGuardError",
    "anonymous_variable",
    "defer",
    "discard_result",
    "log_errors",
    "make_guard",
    "returns_void",
    "validate_action",
    "validate_callable",
]
