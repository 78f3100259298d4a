from http import HTTPStatus

from exceptions.base import BaseError


class AccessDeniedError(BaseError):
    def __init__(
        self,
        message: str = "Access denied. Only super admins can access this portal.",
        status_code: HTTPStatus = HTTPStatus.FORBIDDEN,
    ):
        super().__init__(message=message, status_code=status_code)


class OtpValidationError(BaseError):
    def __init__(
        self,
        message: str = "Invalid input",
        status_code: HTTPStatus = HTTPStatus.UNPROCESSABLE_ENTITY,
    ):
        super().__init__(message=message, status_code=status_code)


class OtpPhoneMissingError(BaseError):
    def __init__(
        self,
        message: str = "Phone number not found, start from login",
        status_code: HTTPStatus = HTTPStatus.UNAUTHORIZED,
    ):
        super().__init__(message=message, status_code=status_code)


class SignInResponseError(BaseError):
    def __init__(
        self,
        message: str = "Unexpected sign-in response",
        status_code: HTTPStatus = HTTPStatus.BAD_GATEWAY,
    ):
        super().__init__(message=message, status_code=status_code)
