"""Errors raised by the toxicity system."""


class ToxicityError(Exception):
    """Base class for all toxicity errors."""


class ConfigurationError(ToxicityError):
    """Raised for malformed or empty threshold and severity tables."""


class InvalidAmountError(ToxicityError):
    """Raised when a toxicity amount is negative."""


class MissingCollaboratorError(ToxicityError):
    """Raised when the host does not provide a required hook."""

    def __init__(self, hook: str) -> None:
        self.hook = hook
        super().__init__(f"Host does not provide required hook {hook!r}")


__all__ = [
    "ToxicityError",
    "ConfigurationError",
    "InvalidAmountError",
    "MissingCollaboratorError",
]
