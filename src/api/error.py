from fastapi import status
from libs.result import Error

# Every credential failure is reported with this single error, whatever the cause
UNAUTHORIZED = Error("UNAUTHORIZED", "Invalid or expired credentials")


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def unauthorized() -> ClientError:
    return ClientError(UNAUTHORIZED, status_code=status.HTTP_401_UNAUTHORIZED)
