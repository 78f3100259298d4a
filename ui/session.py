import json
from pathlib import Path
from typing import Callable, Protocol

import logfire
from pydantic import ValidationError

from constants import TOKEN_KEY, USER_KEY, UTF8
from schemas import SessionAuth, SessionUser

SessionListener = Callable[[SessionAuth | None], None]


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Storage scoped to the running process, like browser session storage."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """JSON file backed storage that survives restarts, like local storage."""

    def __init__(self, path: Path):
        self.path = path

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding=UTF8))
        except (OSError, json.JSONDecodeError) as exc:
            logfire.warn(
                "Unreadable session file {path}: {error}",
                path=str(self.path),
                error=str(exc),
            )
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding=UTF8)

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)


class SessionStore:
    """Holds the signed-in super admin and its bearer token.

    The store is hydrated once at start-up from persistent storage. `login`
    persists a new session, `teardown` clears it and notifies subscribers.
    Teardown is idempotent: only the call that actually ends an active session
    notifies.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        session_storage: KeyValueStorage | None = None,
    ):
        self.storage = storage
        self.session_storage = session_storage or MemoryStorage()
        self._auth: SessionAuth | None = None
        self._hydrated = False
        self._listeners: list[SessionListener] = []

    @property
    def auth(self) -> SessionAuth | None:
        return self._auth

    @property
    def token(self) -> str | None:
        return self._auth.token if self._auth else None

    @property
    def user(self) -> SessionUser | None:
        return self._auth.user if self._auth else None

    @property
    def is_authenticated(self) -> bool:
        return self._auth is not None

    def hydrate(self) -> SessionAuth | None:
        """Load the persisted session, once.

        Returns:
            The restored session, or None when nothing valid was stored.

        """
        if self._hydrated:
            return self._auth
        self._hydrated = True

        token = self.storage.get(TOKEN_KEY)
        raw_user = self.storage.get(USER_KEY)
        if not (token and raw_user):
            return None

        try:
            user = SessionUser.model_validate_json(raw_user)
        except ValidationError as exc:
            logfire.warn("Discarding invalid stored session: {error}", error=str(exc))
            self._clear_storage()
            return None

        self._auth = SessionAuth(token=token, user=user)
        logfire.info("Session restored for {user_id}", user_id=user.id)
        return self._auth

    def login(self, auth: SessionAuth) -> None:
        self._hydrated = True
        self._auth = auth
        self.storage.set(TOKEN_KEY, auth.token)
        self.storage.set(USER_KEY, auth.user.model_dump_json())
        logfire.info("Signed in {user_id}", user_id=auth.user.id)
        self._notify()

    def update_user(self, user: SessionUser) -> None:
        """Replace the signed-in user's profile, keeping the token."""
        if self._auth is None:
            return
        self._auth = self._auth.model_copy(update={"user": user})
        self.storage.set(USER_KEY, user.model_dump_json())
        self._notify()

    def teardown(self, reason: str = "logout") -> bool:
        """End the active session.

        Args:
            reason: Why the session ended, for logging.

        Returns:
            True when an active session was ended, False when there was none.

        """
        if self._auth is None:
            return False

        user_id = self._auth.user.id
        self._auth = None
        self._clear_storage()
        logfire.info(
            "Session ended for {user_id} ({reason})", user_id=user_id, reason=reason
        )
        self._notify()
        return True

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called with the new session on every change.

        Returns:
            A callable removing the listener.

        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _clear_storage(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(USER_KEY)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._auth)
