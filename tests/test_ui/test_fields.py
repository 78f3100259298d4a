from datetime import UTC, datetime, timedelta

import pytest

from enums import EntityKind, PhaseStatus, PhaseType
from tests.factories import DealerFactory, LoanFactory
from ui.fields import (
    BANK_CONTACT_PHONE,
    DEALER_PHONE,
    FIELD_RULES,
    USER_COUNTRY,
    assignee_status_label,
    customer_name,
    dealership_name,
    display_id,
    is_present,
    loan_amount,
    parse_timestamp,
    phase_progress,
    phase_status_label,
    phase_title,
    phase_tone,
    sorted_phases,
    time_left,
    vehicle_title,
)

NOW = datetime(2024, 3, 14, 12, 0, 0, tzinfo=UTC)


def phase(phase_type: PhaseType, **data) -> dict:
    return {"type": phase_type, "status": PhaseStatus.IN_PROGRESS, "data": data}


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, False), ("", False), ("  ", False), ([], False), ({}, False)]
    + [(0, True), ("x", True), (False, True)],
)
def test_is_present(value, expected: bool) -> None:
    assert is_present(value) is expected


class TestLoanAmount:
    def test_top_level_wins(self) -> None:
        loan = LoanFactory(
            loanAmount=90000,
            phases=[phase(PhaseType.DEALERSHIP_PRICING, salePrice=120000)],
        )

        assert loan_amount(loan) == 90000

    def test_zero_is_a_value(self) -> None:
        loan = LoanFactory(
            loanAmount=0,
            phases=[phase(PhaseType.DEALERSHIP_PRICING, salePrice=120000)],
        )

        assert loan_amount(loan) == 0

    def test_selected_offer_before_sale_price(self) -> None:
        loan = LoanFactory(
            loanAmount=None,
            phases=[
                phase(PhaseType.DEALERSHIP_PRICING, salePrice=120000),
                phase(PhaseType.BANK_OFFERS, selectedOffer={"totalAmount": 135000}),
            ],
        )

        assert loan_amount(loan) == 135000

    def test_sale_price_fallback(self) -> None:
        loan = LoanFactory(
            loanAmount=None,
            phases=[phase(PhaseType.DEALERSHIP_PRICING, salePrice=120000)],
        )

        assert loan_amount(loan) == 120000

    def test_missing(self) -> None:
        assert loan_amount(LoanFactory(loanAmount=None)) is None


class TestCustomerAndDealership:
    def test_customer_name_fallbacks(self) -> None:
        assert customer_name(LoanFactory(customer={"name": "Omar"})) == "Omar"
        assert (
            customer_name(LoanFactory(customer={}, clientInfo={"name": "Lina"}))
            == "Lina"
        )
        from_phase = LoanFactory(
            customer={"name": ""},
            phases=[phase(PhaseType.CLIENT_PERSONAL_INFO, name="Huda")],
        )
        assert customer_name(from_phase) == "Huda"
        assert customer_name(LoanFactory(customer=None)) == "Unknown"

    def test_dealership_name_fallbacks(self) -> None:
        nested = LoanFactory(
            phases=[
                phase(PhaseType.DEALERSHIP_SELECTION, dealership={"name": "Gulf"})
            ]
        )
        flat = LoanFactory(
            phases=[phase(PhaseType.DEALERSHIP_SELECTION, dealershipName="Najd")]
        )

        assert dealership_name(LoanFactory(dealership={"name": "Top"})) == "Top"
        assert dealership_name(nested) == "Gulf"
        assert dealership_name(flat) == "Najd"
        assert dealership_name(LoanFactory()) == ""


def test_placeholders() -> None:
    assert DEALER_PHONE.derive({"contactPhone": ""}) == "N/A"
    assert USER_COUNTRY.derive({}) == "KSA"
    assert BANK_CONTACT_PHONE.derive(None) == "-"
    assert FIELD_RULES["bank_name"].derive({}) == "Unknown Bank"


def test_vehicle_title() -> None:
    loan = LoanFactory(vehicle={"year": 2022, "make": "Toyota", "model": "Camry"})

    assert vehicle_title(loan) == "2022 Toyota Camry"
    assert vehicle_title(LoanFactory()) == "-"


def test_display_id() -> None:
    dealer = DealerFactory(code="DLR0042")

    assert display_id(EntityKind.DEALERS, dealer) == "#DLR0042"
    assert display_id(EntityKind.USERS, {"_id": "65f1a2b3c4d5e6f7a8b9c0d1"}) == (
        "#A8B9C0D1"
    )
    assert display_id(EntityKind.USERS, {}) == "-"


class TestTimeLeft:
    def test_hours_minutes_seconds(self) -> None:
        deadline = NOW + timedelta(hours=2, minutes=5)

        assert time_left(deadline.isoformat(), now=NOW) == "2h 5mins 0sec"

    def test_drops_leading_zero_units(self) -> None:
        assert time_left(NOW + timedelta(minutes=3, seconds=10), now=NOW) == (
            "3mins 10sec"
        )
        assert time_left(NOW + timedelta(seconds=42), now=NOW) == "42sec"

    def test_expired(self) -> None:
        assert time_left(NOW, now=NOW) == "Expired"
        assert time_left("2024-03-14T11:00:00Z", now=NOW) == "Expired"

    def test_missing_or_invalid(self) -> None:
        assert time_left(None, now=NOW) == "No deadline"
        assert time_left("tomorrow", now=NOW) == "No deadline"

    def test_naive_deadline_is_utc(self) -> None:
        assert parse_timestamp("2024-03-14T12:00:00") == NOW


class TestPhases:
    def test_sorted_by_order(self) -> None:
        loan = LoanFactory(
            phases=[
                {"type": PhaseType.BANK_OFFERS, "order": 4},
                {"type": PhaseType.CLIENT_PERSONAL_INFO, "order": 1},
                "broken",
            ]
        )

        assert [item["order"] for item in sorted_phases(loan)] == [1, 4]

    def test_title(self) -> None:
        assert phase_title({"type": "dealership_pricing"}) == "Dealership Pricing"
        assert phase_title({"title": "Offers", "type": "bank_offers"}) == "Offers"

    @pytest.mark.parametrize(
        ("status", "progress", "tone", "label"),
        [
            (None, 0, "gray", "Pending"),
            (PhaseStatus.NOT_STARTED, 0, "gray", "Pending"),
            (PhaseStatus.IN_PROGRESS, 50, "yellow", "In Progress"),
            (PhaseStatus.EDITS_REQUIRED, 50, "red", "Edits Required"),
            (PhaseStatus.COMPLETED, 100, "green", "Complete"),
            (PhaseStatus.APPROVED, 100, "green", "Complete"),
            (PhaseStatus.REJECTED, 0, "gray", "Rejected"),
        ],
    )
    def test_progress_and_tone(
        self, status: str | None, progress: int, tone: str, label: str
    ) -> None:
        item = {"status": status}

        assert phase_progress(item) == progress
        assert phase_tone(item) == tone
        assert phase_status_label(item) == label

    def test_assignee_status_label(self) -> None:
        assert assignee_status_label({"status": "pending"}) == ""
        assert assignee_status_label({"status": "complete"}) == "Approved"
        assert assignee_status_label({"status": "rejected"}) == "rejected"
