"""Exception hierarchy for bfdconf.

All exceptions inherit from BfdConfError for consistent handling.
Keyword handlers never raise these: per-line problems are logged and
the offending record is dropped. Exceptions cover what lies outside
the keyword surface (I/O, brace structure, table construction).
"""

from typing import Any


class BfdConfError(Exception):
    """Base exception for all bfdconf errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Configuration source errors
class ConfigError(BfdConfError):
    """Base exception for configuration source errors."""


class ConfigLoadError(ConfigError):
    """Failed to read the configuration source."""


class ConfigParseError(ConfigError):
    """Configuration text is structurally broken (e.g. unbalanced braces)."""

    def __init__(self, message: str, line: int, source: str = "<string>") -> None:
        super().__init__(message, {"line": line, "source": source})
        self.line = line
        self.source = source


# Keyword table errors
class KeywordError(BfdConfError):
    """Conflicting or invalid keyword registration."""

    def __init__(self, keyword: str, reason: str) -> None:
        super().__init__(f"Keyword '{keyword}': {reason}", {"keyword": keyword})
        self.keyword = keyword


# Role errors
class RoleError(BfdConfError):
    """Unknown role, or a role that is not enabled in this build."""

    def __init__(self, role: str, enabled: list[str] | None = None) -> None:
        details: dict[str, Any] = {"role": role}
        if enabled is not None:
            details["enabled"] = enabled
        super().__init__(f"Role not available: {role}", details)
        self.role = role
