import asyncio
import json
from http import HTTPStatus

import httpx
import pytest

from constants import TOKEN_KEY
from enums import (
    AccountStatus,
    DealerStatus,
    EntityKind,
    ErrorCategory,
    LifecycleAction,
)
from exceptions import OperationNotSupportedError
from schemas import ALL_FILTER, DealerRequest, ListQuery
from tests.factories import DealerFactory, UserFactory, envelope, page_envelope
from ui.exceptions import ApiClientError, NotFoundError, UnauthorizedError


class TestList:
    @pytest.mark.asyncio
    async def test_sends_query_and_bearer_token(self, signed_in, make_client) -> None:
        dealers = [DealerFactory(), DealerFactory()]
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                HTTPStatus.OK,
                json=page_envelope(
                    EntityKind.DEALERS, dealers, total=12, page=2, total_pages=2
                ),
            )

        client = make_client(handler)
        query = ListQuery(
            status_filter=DealerStatus.PENDING, search_text="acme", page=2
        )
        result = await client.list(kind=EntityKind.DEALERS, query=query)

        request = requests[0]
        assert request.method == "GET"
        assert request.url.path == "/api/super-admin/dealers"
        assert request.url.params["status"] == "pending"
        assert request.url.params["search"] == "acme"
        assert request.url.params["page"] == "2"
        assert request.url.params["limit"] == "10"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert result.items == dealers
        assert result.total_items == 12
        assert result.total_pages == 2
        assert result.page == 2

    @pytest.mark.asyncio
    async def test_account_tab_maps_to_is_active(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                HTTPStatus.OK, json=page_envelope(EntityKind.USERS, [UserFactory()])
            )

        client = make_client(handler)
        await client.list(
            kind=EntityKind.USERS,
            query=ListQuery(status_filter=AccountStatus.BLOCKED),
        )

        assert requests[0].url.params["isActive"] == "false"
        assert "status" not in requests[0].url.params

    @pytest.mark.asyncio
    async def test_all_filter_sends_no_status(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                HTTPStatus.OK, json=page_envelope(EntityKind.BANK_LOANS, [])
            )

        client = make_client(handler)
        await client.list(
            kind=EntityKind.BANK_LOANS, query=ListQuery(status_filter=ALL_FILTER)
        )

        assert "status" not in requests[0].url.params

    @pytest.mark.asyncio
    async def test_unpaginated_kind(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                HTTPStatus.OK,
                json=envelope({"carTypes": [{"_id": "a"}, {"_id": "b"}, "junk"]}),
            )

        client = make_client(handler)
        result = await client.list(kind=EntityKind.CAR_TYPES, query=ListQuery())

        assert not requests[0].url.params
        assert [item["_id"] for item in result.items] == ["a", "b"]
        assert result.total_items == 2
        assert result.total_pages == 1


class TestErrors:
    @pytest.mark.asyncio
    async def test_envelope_failure(self, signed_in, make_client) -> None:
        client = make_client(
            lambda request: httpx.Response(
                HTTPStatus.OK, json={"success": False, "message": "Dealer exists"}
            )
        )

        with pytest.raises(ApiClientError) as exc_info:
            await client.get_stats()

        assert exc_info.value.detail == "Dealer exists"
        assert exc_info.value.category == ErrorCategory.CLIENT

    @pytest.mark.asyncio
    async def test_error_message_from_body(self, signed_in, make_client) -> None:
        client = make_client(
            lambda request: httpx.Response(
                HTTPStatus.BAD_REQUEST,
                json={"success": False, "error": {"message": "Invalid phone"}},
            )
        )

        with pytest.raises(ApiClientError) as exc_info:
            await client.send_otp(phone="+966500000000")

        assert exc_info.value.status_code == HTTPStatus.BAD_REQUEST
        assert exc_info.value.detail == "Invalid phone"

    @pytest.mark.asyncio
    async def test_server_error(self, signed_in, make_client) -> None:
        client = make_client(
            lambda request: httpx.Response(HTTPStatus.BAD_GATEWAY, text="")
        )

        with pytest.raises(ApiClientError) as exc_info:
            await client.get_stats()

        assert exc_info.value.category == ErrorCategory.SERVER
        assert exc_info.value.detail == "Request failed"

    @pytest.mark.asyncio
    async def test_not_found(self, signed_in, make_client) -> None:
        client = make_client(
            lambda request: httpx.Response(
                HTTPStatus.NOT_FOUND, json={"message": "Dealer not found"}
            )
        )

        with pytest.raises(NotFoundError, match="Dealer not found"):
            await client.get(kind=EntityKind.DEALERS, record_id="missing")

    @pytest.mark.asyncio
    async def test_network_error(self, signed_in, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(ApiClientError) as exc_info:
            await client.get_stats()

        assert exc_info.value.status_code == 0
        assert exc_info.value.category == ErrorCategory.NETWORK
        assert signed_in.is_authenticated

    @pytest.mark.asyncio
    async def test_concurrent_unauthorized_ends_session_once(
        self, signed_in, storage, make_client
    ) -> None:
        events = []
        signed_in.subscribe(events.append)

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0)
            return httpx.Response(
                HTTPStatus.UNAUTHORIZED, json={"message": "Token expired"}
            )

        client = make_client(handler)
        results = await asyncio.gather(
            client.get_stats(),
            client.get_recent_activity(limit=5),
            client.get_me(),
            return_exceptions=True,
        )

        assert all(isinstance(result, UnauthorizedError) for result in results)
        assert events == [None]
        assert not signed_in.is_authenticated
        assert storage.get(TOKEN_KEY) is None


class TestEntityVerbs:
    @pytest.mark.asyncio
    async def test_get_dealer_unwraps_record(self, signed_in, make_client) -> None:
        dealer = DealerFactory()
        client = make_client(
            lambda request: httpx.Response(
                HTTPStatus.OK, json=envelope({"dealer": dealer, "documents": []})
            )
        )

        record = await client.get(kind=EntityKind.DEALERS, record_id=dealer["_id"])

        assert record == dealer

    @pytest.mark.asyncio
    async def test_get_without_detail_endpoint(self, signed_in, make_client) -> None:
        client = make_client(lambda request: httpx.Response(HTTPStatus.OK))

        with pytest.raises(OperationNotSupportedError):
            await client.get(kind=EntityKind.FAQS, record_id="faq-1")

    @pytest.mark.asyncio
    async def test_loans_are_read_only(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []
        client = make_client(requests.append)

        with pytest.raises(OperationNotSupportedError):
            await client.create(kind=EntityKind.BANK_LOANS, payload={})

        assert requests == []

    @pytest.mark.asyncio
    async def test_create_sends_camel_case(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(HTTPStatus.CREATED, json=envelope({"_id": "new"}))

        client = make_client(handler)
        data = await client.create(
            kind=EntityKind.DEALERS,
            payload=DealerRequest(name="Acme Motors", contact_phone="+966511111111"),
        )

        assert data == {"_id": "new"}
        assert requests[0].method == "POST"
        assert json.loads(requests[0].content) == {
            "name": "Acme Motors",
            "contactPhone": "+966511111111",
        }

    @pytest.mark.asyncio
    async def test_dealer_block_sends_reason(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(HTTPStatus.OK, json=envelope({}))

        client = make_client(handler)
        await client.block(kind=EntityKind.DEALERS, record_id="d1", reason="Fraud")

        assert requests[0].method == "PUT"
        assert requests[0].url.path == "/api/super-admin/dealers/d1/block"
        assert json.loads(requests[0].content) == {"reason": "Fraud"}

    @pytest.mark.asyncio
    async def test_user_block_is_an_update(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(HTTPStatus.OK, json=envelope({}))

        client = make_client(handler)
        await client.block(kind=EntityKind.USERS, record_id="u1", reason="Spam")

        assert requests[0].method == "PUT"
        assert requests[0].url.path == "/api/super-admin/users/u1"
        assert json.loads(requests[0].content) == {"isActive": False}

    @pytest.mark.asyncio
    async def test_delete_with_reason(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(HTTPStatus.OK, json=envelope(None))

        client = make_client(handler)
        await client.transition(
            kind=EntityKind.BANKS,
            record_id="b1",
            action=LifecycleAction.DELETE,
            reason="Duplicate",
        )

        assert requests[0].method == "DELETE"
        assert requests[0].url.path == "/api/super-admin/banks/b1"
        assert json.loads(requests[0].content) == {"reason": "Duplicate"}

    @pytest.mark.asyncio
    async def test_restore_user_not_supported(self, signed_in, make_client) -> None:
        client = make_client(lambda request: httpx.Response(HTTPStatus.OK))

        with pytest.raises(OperationNotSupportedError):
            await client.restore(kind=EntityKind.USERS, record_id="u1")
