class BaseUserServiceException(Exception):
    """Root of every error the service maps to an HTTP response."""

    status_code = 500

    @property
    def detail(self) -> str:
        return str(self)


class MissingFieldException(BaseUserServiceException):
    """Exception raised when a required request field is absent or empty."""

    status_code = 400

    def __init__(self, *fields: str):
        self.fields = fields
        noun = "parameter" if len(fields) == 1 else "parameters"
        super().__init__(f"Missing {', '.join(fields)} {noun}")


class StoreException(BaseUserServiceException):
    """Exception raised when the relational store fails or times out."""

    def __init__(self, operation: str, error: Exception):
        self.operation = operation
        self.error = error
        super().__init__(f"Store operation {operation} failed: {error!r}")


class CacheException(BaseUserServiceException):
    """Exception raised when the cache backend fails or times out."""

    def __init__(self, operation: str, error: Exception):
        self.operation = operation
        self.error = error
        super().__init__(f"Cache operation {operation} failed: {error!r}")


class SerializationException(BaseUserServiceException):
    """Exception raised when the user collection cannot be encoded."""

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"Failed to serialize users: {error}")


class KeyNotFoundException(BaseUserServiceException):
    """Exception raised when a key/value read finds nothing."""

    status_code = 404

    def __init__(self, key: str, field: str | None = None):
        self.key = key
        self.field = field
        if field is None:
            message = f"Key {key} not found"
        else:
            message = f"Field {field} not found in key {key}"
        super().__init__(message)


class InvalidBodyException(BaseUserServiceException):
    """Exception raised when a request body is not a JSON user object."""

    status_code = 400

    def __init__(self, error: Exception):
        self.error = error
        super().__init__("Invalid request body")
