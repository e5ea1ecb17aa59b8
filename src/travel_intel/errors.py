"""Exception types raised across the intel pipeline."""

from travel_intel.data import Usage


class IntelError(Exception):
    """Base class for travel-intel errors."""


class ConfigurationError(IntelError):
    """Required configuration (credentials, search scope) is missing.

    This is the only failure that aborts a whole run.
    """


class GenerationError(IntelError):
    """The generative-text service returned no usable structured output.

    ``usage`` holds what the failed call(s) still consumed, so callers can
    account for tokens spent on output that was thrown away.
    """

    def __init__(self, message: str, *, usage: Usage | None = None) -> None:
        super().__init__(message)
        self.usage = usage or Usage()
