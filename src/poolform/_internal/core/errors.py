from typing import Optional


class PoolformError(Exception):
    pass


class ClientError(PoolformError):
    pass


class APIError(ClientError):
    """
    A non-2xx response from the remote API. `str()` of the error is the remote
    message as is so that it can be shown to the operator.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: int = 0,
        resource: Optional[str] = None,
    ):
        super().__init__(message)  # show the message in stacktrace
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.resource = resource

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.status_code}, {self.error_code!r})"

    def is_missing(self) -> bool:
        return self.status_code == 404


class ResourceNotExistsError(APIError):
    pass


class CLIError(PoolformError):
    pass


class ConfigurationError(PoolformError):
    pass
