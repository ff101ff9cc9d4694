"""Error taxonomy shared by the server and the client."""

from __future__ import annotations

_SNIPPET_LENGTH = 200


def body_snippet(body: str | bytes | None, length: int = _SNIPPET_LENGTH) -> str:
    """Return the first *length* characters of a response body for diagnostics."""
    if body is None:
        return ""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body[:length]


class AirportFinderError(Exception):
    """Base class for every error raised by Airport Finder."""


class UpstreamHttpError(AirportFinderError):
    """The airport provider answered with a non-success status."""

    def __init__(self, status: int, status_text: str, body_snippet: str = "") -> None:
        self.status = status
        self.status_text = status_text
        self.body_snippet = body_snippet
        super().__init__(f"Aviationstack API error: {status} {status_text}")


class UpstreamFormatError(AirportFinderError):
    """The provider body is not JSON or does not match the expected schema.

    Guards against HTML error pages (e.g. an invalid-key redirect) being
    treated as data.
    """

    def __init__(
        self,
        message: str,
        *,
        content_type: str | None = None,
        body_snippet: str = "",
    ) -> None:
        self.content_type = content_type
        self.body_snippet = body_snippet
        super().__init__(message)


class ConfigurationError(AirportFinderError):
    """A required setting (usually the provider API key) is missing."""


class UnknownError(AirportFinderError):
    """Wraps any unexpected exception raised while loading airports."""

    @classmethod
    def wrap(cls, exc: BaseException) -> UnknownError:
        err = cls(f"{type(exc).__name__}: {exc}")
        err.__cause__ = exc
        return err
