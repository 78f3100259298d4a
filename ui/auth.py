from dataclasses import dataclass

import logfire
from pydantic import ValidationError

from constants import PHONE_KEY
from exceptions import (
    AccessDeniedError,
    OtpPhoneMissingError,
    OtpValidationError,
    SignInResponseError,
)
from schemas import DebugAuthRequest, SessionAuth
from ui.api import ApiClient
from ui.exceptions import ApiClientError
from ui.otp import OtpInput, ResendCountdown, is_digits
from ui.session import SessionStore

COUNTRY_CODES: dict[str, str] = {
    "+966": "KSA",
    "+971": "UAE",
    "+1": "US",
    "+44": "UK",
}
DEFAULT_COUNTRY_CODE = "+966"


@dataclass(frozen=True)
class DebugPreset:
    name: str
    email: str
    phone: str

    @property
    def label(self) -> str:
        return f"{self.name} ({self.phone})"


DEBUG_PRESETS = (
    DebugPreset(
        name="Super Admin", email="superadmin@carloan.com", phone="+966500000000"
    ),
    DebugPreset(
        name="Super Admin 2", email="superadmin2@carloan.com", phone="+966500000001"
    ),
)


class AuthFlow:
    """Phone and OTP sign-in for super admins.

    The phone number entered on the login step is kept in session-scoped
    storage until the OTP is verified.
    """

    def __init__(
        self,
        client: ApiClient,
        session: SessionStore,
        otp_length: int = 4,
        resend_seconds: int = 58,
    ):
        self.client = client
        self.session = session
        self.otp = OtpInput(length=otp_length)
        self.countdown = ResendCountdown(seconds=resend_seconds)

    @property
    def phone(self) -> str | None:
        return self.session.session_storage.get(PHONE_KEY)

    async def send_otp(
        self, phone: str, country_code: str = DEFAULT_COUNTRY_CODE
    ) -> str:
        """Request an OTP and remember the phone for the verify step.

        Args:
            phone: Local part of the phone number; non-digits are dropped.
            country_code: Dialling prefix, e.g. `+966`.

        Returns:
            The full phone number the code was sent to.

        Raises:
            OtpValidationError: The phone number is empty.

        """
        digits = "".join(char for char in phone if is_digits(char))
        if not digits:
            raise OtpValidationError(message="Please enter your phone number")

        full_phone = f"{country_code}{digits}"
        self.session.session_storage.set(PHONE_KEY, full_phone)
        await self.client.send_otp(phone=full_phone)
        self.otp.reset()
        self.countdown.restart()
        logfire.info("OTP requested for {phone}", phone=full_phone)
        return full_phone

    async def resend_otp(self) -> None:
        phone = self.phone
        if not phone:
            raise OtpPhoneMissingError()
        await self.client.send_otp(phone=phone)
        self.otp.reset()
        self.countdown.restart()

    async def verify_otp(self, code: str | None = None) -> SessionAuth:
        """Verify the OTP and start a super admin session.

        Args:
            code: Code to verify; defaults to the digits entered so far.

        Returns:
            The new session.

        Raises:
            OtpPhoneMissingError: No phone was stored by the login step.
            OtpValidationError: The code is not complete.
            AccessDeniedError: The account is not a super admin.
            SignInResponseError: The backend reply has no token or user role.

        """
        phone = self.phone
        if not phone:
            raise OtpPhoneMissingError()

        code = self.otp.code if code is None else code
        if len(code) != self.otp.length or not is_digits(code):
            raise OtpValidationError(
                message=f"Please enter the complete {self.otp.length}-digit code"
            )

        data = await self.client.verify_otp(phone=phone, otp=code)
        auth = self._start_session(data)
        self.session.session_storage.remove(PHONE_KEY)
        return auth

    async def debug_login(self, preset: DebugPreset) -> SessionAuth:
        """Sign in without an OTP, for development backends."""
        data = await self.client.debug_auth(
            DebugAuthRequest(name=preset.name, email=preset.email, phone=preset.phone)
        )
        return self._start_session(data)

    async def logout(self) -> None:
        """Sign out; the local session ends even when the backend call fails."""
        try:
            await self.client.logout()
        except ApiClientError as exc:
            logfire.warn("Logout request failed: {detail}", detail=exc.detail)
        finally:
            self.session.teardown(reason="logout")

    def _start_session(self, data: object) -> SessionAuth:
        try:
            auth = SessionAuth.from_login_data(data)
        except ValidationError as exc:
            logfire.warn("Malformed sign-in response: {error}", error=str(exc))
            raise SignInResponseError() from exc
        if not auth.user.is_super_admin:
            logfire.warn(
                "Rejected sign-in for {user_id} with role {role}",
                user_id=auth.user.id,
                role=auth.user.role,
            )
            raise AccessDeniedError()
        self.session.login(auth)
        return auth
