from typing import Any

import httpx
import logfire

from constants import REQUEST_FAILED
from enums import EntityKind, ErrorCategory, LifecycleAction
from exceptions import OperationNotSupportedError
from schemas import (
    CamelModel,
    DebugAuthRequest,
    GlobalPreferencesRequest,
    ListQuery,
    NotificationSettingsRequest,
    PageResult,
    ProfileUpdateRequest,
    SendOtpRequest,
    VerifyOtpRequest,
)
from ui.exceptions import ApiClientError, NotFoundError, UnauthorizedError
from ui.session import SessionStore

Payload = CamelModel | dict[str, Any]


def extract_error_detail(payload: Any) -> str:
    """Pick the human readable message out of an error response body.

    Args:
        payload: Decoded response body.

    Returns:
        Server supplied message, or a generic fallback.

    """
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        for key in ("message", "detail"):
            if payload.get(key):
                return str(payload[key])
    elif isinstance(payload, str) and payload.strip():
        return payload.strip()
    return REQUEST_FAILED


class ApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: SessionStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize API client.

        Args:
            base_url: Backend base URL including the API prefix.
            timeout: Default request timeout in seconds.
            session: Session store providing the bearer token.
            transport: Optional httpx transport, used by tests.

        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Perform a single HTTP request and unwrap the response envelope."""
        url = f"{self.base_url}{path}"
        headers: dict[str, str] = {}
        token = self.session.token if self.session else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method=method, url=url, headers=headers, **kwargs
                )
        except httpx.HTTPError as exc:
            logfire.warn(
                "{method} {path} failed: {error}",
                method=method,
                path=path,
                error=str(exc),
            )
            raise ApiClientError(0, str(exc) or REQUEST_FAILED) from exc

        payload: Any
        try:
            payload = response.json()
        except ValueError:
            payload = response.text or None

        if response.status_code == 401:
            if self.session is not None:
                self.session.teardown(reason="unauthorized")
            raise UnauthorizedError(extract_error_detail(payload))

        if response.status_code == 404:
            raise NotFoundError(extract_error_detail(payload))

        if not response.is_success:
            raise ApiClientError(response.status_code, extract_error_detail(payload))

        if isinstance(payload, dict):
            if payload.get("success") is False:
                raise ApiClientError(
                    response.status_code,
                    extract_error_detail(payload),
                    ErrorCategory.CLIENT,
                )
            if "data" in payload:
                return payload["data"]
        return payload

    @staticmethod
    def _to_json(payload: Payload) -> dict[str, Any]:
        if isinstance(payload, CamelModel):
            return payload.to_payload()
        return payload

    @staticmethod
    def _ensure_writable(kind: EntityKind) -> None:
        if kind in EntityKind.get_read_only():
            raise OperationNotSupportedError(message=f"{kind.label} are read-only")

    # Generic entity verbs

    async def list(self, kind: EntityKind, query: ListQuery) -> PageResult:
        """Fetch one page of records."""
        data = await self._request("GET", kind.path, params=query.to_params(kind))
        return PageResult.from_envelope(data=data, kind=kind, query=query)

    async def get(self, kind: EntityKind, record_id: str) -> dict[str, Any]:
        """Fetch a single record by ID."""
        if kind not in EntityKind.get_detailed():
            raise OperationNotSupportedError(
                message=f"{kind.label} have no detail endpoint"
            )

        data = await self._request("GET", f"{kind.path}/{record_id}")
        if kind.detail_key and isinstance(data, dict) and kind.detail_key in data:
            data = data[kind.detail_key]
        if not isinstance(data, dict) or not data:
            raise NotFoundError(f"{kind.label} record {record_id} not found")
        return data

    async def create(self, kind: EntityKind, payload: Payload) -> Any:
        """Create a record."""
        self._ensure_writable(kind)
        return await self._request("POST", kind.path, json=self._to_json(payload))

    async def update(self, kind: EntityKind, record_id: str, payload: Payload) -> Any:
        """Update a record."""
        self._ensure_writable(kind)
        return await self._request(
            "PUT", f"{kind.path}/{record_id}", json=self._to_json(payload)
        )

    async def delete(
        self, kind: EntityKind, record_id: str, reason: str | None = None
    ) -> Any:
        """Delete a record, optionally recording a reason."""
        self._ensure_writable(kind)
        body = {"reason": reason} if reason else None
        return await self._request("DELETE", f"{kind.path}/{record_id}", json=body)

    async def transition(
        self,
        kind: EntityKind,
        record_id: str,
        action: LifecycleAction,
        reason: str | None = None,
    ) -> Any:
        """Run a lifecycle action against a record.

        Dealers have a dedicated endpoint per action. Users and banks only
        carry an `isActive` flag, so block and unblock are sent as updates.

        Args:
            kind: Entity kind of the record.
            record_id: Record ID.
            action: Lifecycle action to run.
            reason: Optional free-text reason (block, delete).

        Returns:
            Envelope `data` returned by the backend.

        """
        self._ensure_writable(kind)
        if action is LifecycleAction.DELETE:
            return await self.delete(kind=kind, record_id=record_id, reason=reason)

        if kind is EntityKind.DEALERS:
            body = {"reason": reason} if action is LifecycleAction.BLOCK else None
            return await self._request(
                "PUT", f"{kind.path}/{record_id}/{action.value}", json=body
            )

        if kind in (EntityKind.USERS, EntityKind.BANKS) and action in (
            LifecycleAction.BLOCK,
            LifecycleAction.UNBLOCK,
        ):
            return await self.update(
                kind=kind,
                record_id=record_id,
                payload={"isActive": action is LifecycleAction.UNBLOCK},
            )

        raise OperationNotSupportedError(
            message=f"{action.label} is not available for {kind.label}"
        )

    async def approve(self, kind: EntityKind, record_id: str) -> Any:
        return await self.transition(kind, record_id, LifecycleAction.APPROVE)

    async def block(self, kind: EntityKind, record_id: str, reason: str) -> Any:
        return await self.transition(kind, record_id, LifecycleAction.BLOCK, reason)

    async def unblock(self, kind: EntityKind, record_id: str) -> Any:
        return await self.transition(kind, record_id, LifecycleAction.UNBLOCK)

    async def restore(self, kind: EntityKind, record_id: str) -> Any:
        return await self.transition(kind, record_id, LifecycleAction.RESTORE)

    # Auth

    async def send_otp(self, phone: str) -> Any:
        """Request an OTP for the phone number."""
        payload = SendOtpRequest(phone=phone)
        return await self._request(
            "POST", "/auth/send-otp", json=payload.model_dump(mode="json")
        )

    async def verify_otp(self, phone: str, otp: str) -> Any:
        """Exchange phone and OTP for a token and user."""
        payload = VerifyOtpRequest(phone=phone, otp=otp)
        return await self._request(
            "POST", "/auth/verify-otp", json=payload.model_dump(mode="json")
        )

    async def get_me(self) -> Any:
        return await self._request("GET", "/auth/me")

    async def update_profile(self, payload: ProfileUpdateRequest) -> Any:
        return await self._request("PUT", "/auth/profile", json=payload.to_payload())

    async def logout(self) -> Any:
        return await self._request("POST", "/auth/logout")

    async def debug_auth(self, payload: DebugAuthRequest) -> Any:
        """Development sign-in bypassing the OTP step."""
        return await self._request(
            "POST", "/auth/debug-auth", json=payload.model_dump(mode="json")
        )

    # Dashboard and profile

    async def get_stats(self) -> Any:
        return await self._request("GET", "/super-admin/dashboard/stats")

    async def get_recent_activity(self, limit: int | None = None) -> Any:
        params = {"limit": limit} if limit else None
        return await self._request(
            "GET", "/super-admin/dashboard/activity", params=params
        )

    async def update_notification_settings(
        self, payload: NotificationSettingsRequest
    ) -> Any:
        return await self._request(
            "PUT",
            "/super-admin/profile/notification-settings",
            json=payload.to_payload(),
        )

    async def update_global_preferences(
        self, payload: GlobalPreferencesRequest
    ) -> Any:
        return await self._request(
            "PUT",
            "/super-admin/profile/global-preferences",
            json=payload.to_payload(),
        )
