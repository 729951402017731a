from typing import Any


class ScopeGuardError(Exception):
    pass


class InvalidActionSignatureError(ScopeGuardError, TypeError):
    def __init__(self, action: Any, reason: str) -> None:
        super().__init__(f"invalid guard action {action!r}: {reason}")
        self.action = action
        self.reason = reason


class GuardConstructionError(ScopeGuardError, TypeError):
    pass


class GuardCopyError(ScopeGuardError, TypeError):
    pass


class ScopeClosedError(ScopeGuardError):
    pass


class ConfigError(ScopeGuardError):
    def __init__(self, msg: Any) -> None:
        super().__init__("invalid scope_guard configuration: " + str(msg))
