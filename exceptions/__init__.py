from exceptions.action import (
    ConfirmationRequiredError,
    ReasonRequiredError,
    TransitionNotAllowedError,
)
from exceptions.auth import (
    AccessDeniedError,
    OtpPhoneMissingError,
    OtpValidationError,
    SignInResponseError,
)
from exceptions.base import BaseError
from exceptions.entity import OperationNotSupportedError

__all__ = [
    "AccessDeniedError",
    "BaseError",
    "ConfirmationRequiredError",
    "OperationNotSupportedError",
    "OtpPhoneMissingError",
    "OtpValidationError",
    "ReasonRequiredError",
    "SignInResponseError",
    "TransitionNotAllowedError",
]
