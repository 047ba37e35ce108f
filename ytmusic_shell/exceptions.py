"""
Exception classes for ytmusic-shell.

Each exception is designed to provide a clear, human-readable message that a
UI layer can show as-is, and to distinguish between the failure modes of a
single API call.

Exception Hierarchy:
    YTMusicShellError (base)
        AuthUnavailableError - no usable session cookies
        TransportError - the request never produced a response
            RequestTimeoutError - no response within the timeout
        ResponseParseError - the response body is not JSON
        StreamResolveError - no playable stream for a video

Shape mismatches inside a valid JSON response are not errors:
the parsing layer degrades them to empty values.
"""


class YTMusicShellError(Exception):
    """
    Base exception for all ytmusic-shell errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g. url, status code).
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': Endpoint the request was sent to
                     - 'status_code': HTTP status of the response
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class AuthUnavailableError(YTMusicShellError):
    """
    Raised when no signing-key cookie (or no cookie source) is available.

    Callers are expected to check authentication before privileged calls;
    this error is raised when a cookie source cannot be read at all, or by
    the service facade when it refuses to issue a privileged call.
    """
    pass


class TransportError(YTMusicShellError):
    """
    Raised when the request did not complete.

    Covers DNS failures, refused or reset connections, TLS errors and HTTP
    error statuses returned by the remote service (a rejected signature
    surfaces here). Terminal for the call; never retried internally.
    """
    pass


class RequestTimeoutError(TransportError):
    """Raised when no response arrived within the configured timeout."""
    pass


class ResponseParseError(YTMusicShellError):
    """
    Raised when a response body is not valid JSON.

    The message carries a bounded prefix of the body, never the full body.

    Example:
        raise ResponseParseError(
            "JSON parse error: <html><head>...",
            details={'url': url, 'body_length': 51234}
        )
    """
    pass


class StreamResolveError(YTMusicShellError):
    """Raised when yt-dlp cannot produce a direct stream URL for a video."""
    pass
