from typing import Optional


class RelayError(Exception):
    """Base class for failures while relaying a tweet's photos to Gyazo.

    ``status_code`` is the HTTP status this service answers with;
    ``upstream_status`` is the status returned by the remote API, if any.
    """

    status_code = 500

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.upstream_status = upstream_status

    def __str__(self) -> str:
        if self.upstream_status is not None:
            return f"{self.message} (status {self.upstream_status})"
        return self.message


class ValidationError(RelayError):
    """Inbound request has the wrong method or content type."""

    status_code = 405


class FetchError(RelayError):
    """Twitter status lookup failed or was unreachable."""


class ParseError(RelayError):
    """Twitter returned a body that is not a usable status."""


class DownloadError(RelayError):
    """A photo could not be downloaded."""


class UploadError(RelayError):
    """Gyazo rejected an upload or answered with an unusable body."""
