"""Custom exception hierarchy for the xAPI client."""


class XAPIError(Exception):
    """Base exception for all xAPI client errors."""


# --- Configuration ---
class ConfigurationError(XAPIError):
    """Client used before configure(), or invalid settings."""


# --- Statements ---
class StatementError(XAPIError):
    """A wire mapping could not be parsed into a statement."""


# --- Transmission ---
class TransmissionError(XAPIError):
    """The LRS answered with a non-success HTTP status."""

    def __init__(self, status_code: int, status_text: str, body: str):
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"HTTP {status_code}: {status_text}. {body}")
