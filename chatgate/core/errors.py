"""
Application errors for clean API error handling.

InvalidInputError is raised before any backend is contacted and maps to 400.
ServiceUnavailableError covers a misconfigured dependency (e.g. no search key);
the API renders it, like any other uncaught failure, as a 500 text response.
"""


class InvalidInputError(Exception):
    """Raised when the submitted form fails validation (empty or oversized query, missing model)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. the search API) is unavailable or misconfigured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
