"""Error kinds raised by the allocator and the link store.

Each carries the HTTP status and the user-facing message it maps to, so the
web layer can translate any of them with a single exception handler.
"""


class LinkError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidUrl(LinkError):
    status_code = 400
    message = "Please enter a valid URL"


class InvalidCodeFormat(LinkError):
    status_code = 400
    message = "Code must be 6-8 alphanumeric characters"


class CodeTaken(LinkError):
    status_code = 409
    message = "Code already exists"

    def __init__(self, code: str):
        super().__init__()
        self.code = code


class AllocationExhausted(LinkError):
    status_code = 503
    message = "Could not allocate a unique code, please retry"

    def __init__(self, attempts: int):
        super().__init__()
        self.attempts = attempts


class LinkNotFound(LinkError):
    status_code = 404
    message = "Link not found"

    def __init__(self, code: str):
        super().__init__()
        self.code = code


class StoreUnavailable(LinkError):
    """The database could not be reached or a query failed for infrastructure reasons."""
    status_code = 500
    message = "Internal server error"
