"""Error taxonomy shared by both emissions pipelines.

Every failure a submission can hit is one of four kinds. The message is what
the user sees, verbatim; ``status_code`` is what the HTTP surface answers with.
"""

from typing import Optional


class EmissionsError(Exception):
    status_code: int = 500
    default_message: str = "Failed to calculate emissions"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(EmissionsError, ValueError):
    """Malformed or missing input, caught before any network call."""
    status_code = 400
    default_message = "Invalid flight details"


class ConfigurationError(EmissionsError):
    """A required credential or URL is not configured."""
    status_code = 503
    default_message = "Emissions service is not configured"


class TransportError(EmissionsError):
    """The request never reached the server, or no response came back."""
    status_code = 502
    default_message = "Could not reach the emissions service"


class UpstreamError(EmissionsError):
    """The server answered with a failure status or an empty body."""
    status_code = 502
    default_message = "Failed to calculate emissions"
