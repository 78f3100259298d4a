from enums import ErrorCategory


class ApiClientError(Exception):
    """Raised when a backend API call fails."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        category: ErrorCategory | None = None,
    ):
        """Initialize API client error.

        Args:
            status_code: HTTP status code, or 0 for transport errors.
            detail: Error detail text.
            category: Error category, derived from the status code when omitted.

        """
        self.status_code = status_code
        self.detail = detail
        self.category = category or categorize(status_code)
        super().__init__(f"{status_code}: {detail}")


class UnauthorizedError(ApiClientError):
    """Raised after the session was torn down because of a 401 response."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(401, detail, ErrorCategory.UNAUTHORIZED)


class NotFoundError(ApiClientError):
    def __init__(self, detail: str = "Not found"):
        super().__init__(404, detail, ErrorCategory.NOT_FOUND)


def categorize(status_code: int) -> ErrorCategory:
    """Map an HTTP status code to an error category.

    Args:
        status_code: HTTP status code, or 0 for transport errors.

    Returns:
        The matching error category.

    """
    if status_code == 0:
        return ErrorCategory.NETWORK
    if status_code == 401:
        return ErrorCategory.UNAUTHORIZED
    if status_code == 404:
        return ErrorCategory.NOT_FOUND
    if status_code >= 500:
        return ErrorCategory.SERVER
    return ErrorCategory.CLIENT
