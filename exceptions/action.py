from http import HTTPStatus

from exceptions.base import BaseError


class ConfirmationRequiredError(BaseError):
    def __init__(
        self,
        message: str = "Action requires confirmation",
        status_code: HTTPStatus = HTTPStatus.PRECONDITION_REQUIRED,
    ):
        super().__init__(message=message, status_code=status_code)


class TransitionNotAllowedError(BaseError):
    def __init__(
        self,
        message: str = "Action not allowed for current status",
        status_code: HTTPStatus = HTTPStatus.CONFLICT,
    ):
        super().__init__(message=message, status_code=status_code)


class ReasonRequiredError(BaseError):
    def __init__(
        self,
        message: str = "Please provide a reason",
        status_code: HTTPStatus = HTTPStatus.UNPROCESSABLE_ENTITY,
    ):
        super().__init__(message=message, status_code=status_code)
