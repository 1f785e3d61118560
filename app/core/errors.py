class ApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = str(code)
        self.message = message
        super().__init__(message)


class NotFoundError(ApiError):
    """A course, progress record, job or user is missing. Callers may offer a restart."""

    def __init__(self, code: str, message: str):
        super().__init__(status_code=404, code=code, message=message)


class ValidationError(ApiError):
    """Malformed input: a course definition, an answer, a status transition."""

    def __init__(self, code: str, message: str):
        super().__init__(status_code=422, code=code, message=message)


class PersistenceError(ApiError):
    """A write to the backing store failed. Transient; the caller may retry."""

    def __init__(self, code: str, message: str):
        super().__init__(status_code=503, code=code, message=message)


class PermissionDeniedError(ApiError):
    def __init__(self, code: str, message: str):
        super().__init__(status_code=403, code=code, message=message)
