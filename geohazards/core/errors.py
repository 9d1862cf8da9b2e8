"""Error types - Shared by core and shell.

Every failure an operation can surface to a caller is one of these.
None of them are retried or converted into partial results.
"""


class GeohazardError(Exception):
    """Base class for all operation failures.

    Attributes:
        code: Stable machine-readable error code
        message: Human-readable description
    """
    code = "geohazard_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(GeohazardError):
    """A caller-supplied parameter is outside its declared bounds.

    Raised before any upstream call is made.
    """
    code = "invalid_input"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class UpstreamUnavailable(GeohazardError):
    """An upstream source returned a non-success status or could not be reached."""
    code = "upstream_unavailable"

    def __init__(
        self,
        source: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.status_code = status_code


class UpstreamMalformed(GeohazardError):
    """An upstream source answered successfully but the body is not usable."""
    code = "upstream_malformed"

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class EventNotFound(GeohazardError):
    """The earthquake service has no event with the requested ID."""
    code = "event_not_found"

    def __init__(self, event_id: str) -> None:
        super().__init__(f"No earthquake found with ID '{event_id}'")
        self.event_id = event_id
