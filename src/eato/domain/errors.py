"""Domain error types."""


class InvalidInputError(ValueError):
    """Raised when a calculator receives malformed input."""


class RuleViolationError(ValueError):
    """Raised when a well-formed request is refused by the gamification rules."""
