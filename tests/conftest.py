from typing import Awaitable, Callable

import httpx
import logfire
import pytest

from schemas import SessionAuth
from tests.factories import SessionUserFactory
from ui.api import ApiClient
from ui.session import MemoryStorage, SessionStore

logfire.configure(send_to_logfire=False, console=False)

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]
ClientBuilder = Callable[[Handler], ApiClient]

BASE_URL = "http://test/api"


@pytest.fixture(scope="function")
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture(scope="function")
def session_store(storage: MemoryStorage) -> SessionStore:
    return SessionStore(storage=storage)


@pytest.fixture(scope="function")
def signed_in(session_store: SessionStore) -> SessionStore:
    session_store.login(
        SessionAuth(token="test-token", user=SessionUserFactory())
    )
    return session_store


@pytest.fixture(scope="function")
def make_client(session_store: SessionStore) -> ClientBuilder:
    def build(handler: Handler) -> ApiClient:
        return ApiClient(
            base_url=BASE_URL,
            session=session_store,
            transport=httpx.MockTransport(handler),
        )

    return build
