import json
from pathlib import Path

from constants import TOKEN_KEY, USER_KEY
from schemas import SessionAuth, SessionUser
from tests.factories import SessionUserFactory
from ui.session import FileStorage, MemoryStorage, SessionStore


def make_auth(**kwargs) -> SessionAuth:
    return SessionAuth(token="token-1", user=SessionUserFactory(**kwargs))


class TestHydrate:
    def test_restores_persisted_session(self, storage: MemoryStorage) -> None:
        user = SessionUser.model_validate(SessionUserFactory(name="Sara"))
        storage.set(TOKEN_KEY, "stored-token")
        storage.set(USER_KEY, user.model_dump_json())

        store = SessionStore(storage=storage)
        auth = store.hydrate()

        assert auth is not None
        assert store.token == "stored-token"
        assert store.user.name == "Sara"

    def test_nothing_stored(self, session_store: SessionStore) -> None:
        assert session_store.hydrate() is None
        assert not session_store.is_authenticated

    def test_invalid_user_is_discarded(self, storage: MemoryStorage) -> None:
        storage.set(TOKEN_KEY, "stored-token")
        storage.set(USER_KEY, "{not json")

        store = SessionStore(storage=storage)

        assert store.hydrate() is None
        assert storage.get(TOKEN_KEY) is None
        assert storage.get(USER_KEY) is None

    def test_runs_once(self, storage: MemoryStorage) -> None:
        store = SessionStore(storage=storage)
        store.hydrate()
        storage.set(TOKEN_KEY, "late-token")
        storage.set(USER_KEY, json.dumps(SessionUserFactory()))

        assert store.hydrate() is None


class TestLoginTeardown:
    def test_login_persists_and_notifies(
        self, session_store: SessionStore, storage: MemoryStorage
    ) -> None:
        events = []
        session_store.subscribe(events.append)
        auth = make_auth()

        session_store.login(auth)

        assert session_store.is_authenticated
        assert storage.get(TOKEN_KEY) == "token-1"
        assert SessionUser.model_validate_json(storage.get(USER_KEY)) == auth.user
        assert events == [auth]

    def test_teardown_is_idempotent(
        self, signed_in: SessionStore, storage: MemoryStorage
    ) -> None:
        events = []
        signed_in.subscribe(events.append)

        assert signed_in.teardown(reason="unauthorized") is True
        assert signed_in.teardown(reason="unauthorized") is False
        assert events == [None]
        assert signed_in.token is None
        assert storage.get(TOKEN_KEY) is None

    def test_unsubscribe(self, session_store: SessionStore) -> None:
        events = []
        unsubscribe = session_store.subscribe(events.append)
        unsubscribe()

        session_store.login(make_auth())

        assert events == []

    def test_update_user_keeps_token(
        self, signed_in: SessionStore, storage: MemoryStorage
    ) -> None:
        user = signed_in.user.model_copy(update={"name": "New Name"})

        signed_in.update_user(user)

        assert signed_in.token == "test-token"
        assert signed_in.user.name == "New Name"
        assert json.loads(storage.get(USER_KEY))["name"] == "New Name"

    def test_update_user_without_session(self, session_store: SessionStore) -> None:
        user = SessionUser.model_validate(SessionUserFactory())

        session_store.update_user(user)

        assert session_store.user is None


class TestFileStorage:
    def test_survives_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "session.json"
        FileStorage(path).set(TOKEN_KEY, "persisted")

        assert FileStorage(path).get(TOKEN_KEY) == "persisted"

    def test_remove(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path / "session.json")
        storage.set(TOKEN_KEY, "persisted")
        storage.set(USER_KEY, "{}")

        storage.remove(TOKEN_KEY)

        assert storage.get(TOKEN_KEY) is None
        assert storage.get(USER_KEY) == "{}"

    def test_corrupt_file_reads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text("[broken", encoding="utf-8")

        assert FileStorage(path).get(TOKEN_KEY) is None
