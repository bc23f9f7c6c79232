class PassdrawError(Exception):
    """Base error for the pass allocation tool."""


class RandomSourceError(PassdrawError):
    """Raised when a runner cannot be given a usable random source."""


class UserParseError(PassdrawError, ValueError):
    """Raised when a line-oriented user definition is malformed."""

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"parse error on line {line_number}: {reason}")


class AvailabilityParseError(PassdrawError, ValueError):
    """Raised when a `partition:passes` string is malformed."""


class ConfigValidationError(PassdrawError, ValueError):
    """Raised when a run configuration is inconsistent."""
