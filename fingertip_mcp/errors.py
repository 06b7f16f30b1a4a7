"""Error taxonomy for tool invocations.

Every failure raised inside the tool pipeline is a ``FingertipToolError``
subclass carrying a ``kind`` discriminator. The pipeline turns all of them
into the same ``"Error: ..."`` text envelope at the tool boundary.
"""

from typing import Optional


class FingertipToolError(Exception):
    """Base class for errors that end a single tool invocation."""

    kind = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FingertipToolError):
    """Tool arguments do not match the tool's input schema."""

    kind = "validation"


class ContentParseError(FingertipToolError):
    """A string ``content`` field is not valid JSON."""

    kind = "content_parse"


class TransportError(FingertipToolError):
    """Network-level failure (DNS, refused connection, timeout)."""

    kind = "transport"


class UpstreamError(FingertipToolError):
    """The Fingertip API answered with a non-2xx status or an unreadable body."""

    kind = "upstream"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(Exception):
    """Invalid or missing process configuration. Fatal at startup."""
