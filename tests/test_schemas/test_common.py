import pytest
from pydantic import ValidationError

from enums import AccountStatus, DealerStatus, EntityKind, Role
from schemas import (
    ALL_FILTER,
    BankRequest,
    ContactPersonRequest,
    ListQuery,
    PageResult,
    SessionAuth,
)


class TestListQuery:
    def test_dealer_params(self) -> None:
        query = ListQuery(status_filter=DealerStatus.BLOCKED, search_text="gulf")

        assert query.to_params(EntityKind.DEALERS) == {
            "page": 1,
            "limit": 10,
            "search": "gulf",
            "status": "blocked",
        }

    def test_account_params(self) -> None:
        active = ListQuery(status_filter=AccountStatus.ACTIVE)
        deleted = ListQuery(status_filter=AccountStatus.DELETED)

        assert active.to_params(EntityKind.BANKS)["isActive"] == "true"
        assert "isActive" not in deleted.to_params(EntityKind.BANKS)

    def test_all_and_unpaginated(self) -> None:
        query = ListQuery(status_filter=ALL_FILTER, page=3)

        assert query.to_params(EntityKind.BANK_LOANS) == {"page": 3, "limit": 10}
        assert query.to_params(EntityKind.FAQS) == {}

    def test_page_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ListQuery(page=0)


class TestPageResult:
    def test_total_pages_from_pages_key(self) -> None:
        result = PageResult.from_envelope(
            data={
                "users": [{"_id": "u1"}],
                "pagination": {"total": 31, "page": 4, "limit": 10, "pages": 4},
            },
            kind=EntityKind.USERS,
            query=ListQuery(page=4),
        )

        assert result.total_pages == 4
        assert result.page == 4

    def test_total_pages_computed(self) -> None:
        result = PageResult.from_envelope(
            data={"banks": [], "pagination": {"total": 21, "limit": 10}},
            kind=EntityKind.BANKS,
            query=ListQuery(page=2),
        )

        assert result.total_pages == 3
        assert result.page == 2

    def test_empty_payload(self) -> None:
        result = PageResult.from_envelope(
            data=None, kind=EntityKind.DEALERS, query=ListQuery()
        )

        assert result.items == []
        assert result.total_items == 0
        assert result.total_pages == 1


class TestSessionAuth:
    def test_from_login_data_accepts_mongo_id(self) -> None:
        auth = SessionAuth.from_login_data(
            {
                "token": "jwt",
                "user": {"_id": "a1", "name": "Admin", "role": "super_admin"},
            }
        )

        assert auth.user.id == "a1"
        assert auth.user.is_super_admin

    def test_other_roles_are_not_super_admin(self) -> None:
        auth = SessionAuth.from_login_data(
            {"token": "jwt", "user": {"id": "a2", "role": Role.ADMIN}}
        )

        assert not auth.user.is_super_admin

    def test_missing_token(self) -> None:
        with pytest.raises(ValidationError):
            SessionAuth.from_login_data({"user": {"id": "a1", "role": "super_admin"}})


def test_nested_request_payload_is_camel_case() -> None:
    payload = BankRequest(
        name="Riyad Bank",
        contact_person=ContactPersonRequest(name="Faisal", phone="+966511111111"),
        is_active=True,
    )

    assert payload.to_payload() == {
        "name": "Riyad Bank",
        "contactPerson": {"name": "Faisal", "phone": "+966511111111"},
        "isActive": True,
    }
