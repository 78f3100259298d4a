from http import HTTPStatus

from exceptions.base import BaseError


class OperationNotSupportedError(BaseError):
    def __init__(
        self,
        message: str = "Operation not supported",
        status_code: HTTPStatus = HTTPStatus.METHOD_NOT_ALLOWED,
    ):
        super().__init__(message=message, status_code=status_code)
