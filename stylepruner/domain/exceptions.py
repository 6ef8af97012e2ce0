"""Exception types raised by the stylepruner domain and its adapters."""

from typing import Optional


class StylePrunerError(Exception):
    """Base class for all stylepruner errors."""


class SerializationError(StylePrunerError):
    """Raised when an analysis configuration cannot be converted to JSON."""


class AnalysisError(StylePrunerError):
    """Raised when the external analysis tool could not be run.

    Attributes:
        cause: The underlying exception, if any.
        partial_output: Whatever output was captured before the failure.
    """
    def __init__(self, message: str, cause: Optional[BaseException] = None, partial_output: str = ""):
        self.cause = cause
        self.partial_output = partial_output
        details = f"{message}: {cause}" if cause is not None else message
        if partial_output:
            details = f"{details} :: {partial_output.strip()}"
        super().__init__(details)


class AnalysisTimeoutError(TimeoutError):
    """Raised when the external analysis tool exceeds its time limit.

    Kept outside the AnalysisError hierarchy; callers tell the two apart.
    """
    def __init__(self, timeout: float, partial_output: str = ""):
        self.timeout = timeout
        self.partial_output = partial_output
        super().__init__(f"uncss did not finish within {timeout}s")
