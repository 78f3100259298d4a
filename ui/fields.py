"""Display values derived from loosely shaped backend records.

The same fact may live in several places of a record (a top-level field, a
nested object, or the payload of a workflow phase). Each display field has a
named `FieldRule` listing those places in order and a fixed placeholder used
when none of them holds a value.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Callable

from constants import (
    DASH,
    DEFAULT_ASSIGNEE,
    DEFAULT_COUNTRY,
    EMPTY,
    EXPIRED,
    NO_DEADLINE,
    NO_PHONE,
    NOT_AVAILABLE,
    UNKNOWN,
    UNKNOWN_BANK,
)
from enums import EntityKind, PhaseStatus, PhaseType

Record = dict[str, Any]
Locator = Callable[[Record], Any]


def is_present(value: Any) -> bool:
    """None, blank strings and empty collections count as missing; 0 does not."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return bool(value)
    return True


def dig(data: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def field(*path: str) -> Locator:
    """Locate a (possibly nested) field of the record itself."""

    def locate(record: Record) -> Any:
        return dig(record, *path)

    return locate


def find_phase(record: Record, phase_type: str) -> Record | None:
    for phase in record.get("phases") or []:
        if isinstance(phase, dict) and phase.get("type") == phase_type:
            return phase
    return None


def phase_field(phase_type: PhaseType, *path: str) -> Locator:
    """Locate a field inside the `data` of the phase with the given type."""

    def locate(record: Record) -> Any:
        phase = find_phase(record, phase_type)
        return dig(phase, "data", *path) if phase else None

    return locate


@dataclass(frozen=True)
class FieldRule:
    name: str
    kind: EntityKind | None
    locators: tuple[Locator, ...]
    default: Any

    def derive(self, record: Record | None) -> Any:
        """Return the first present value, or the rule's placeholder."""
        if not isinstance(record, dict):
            return self.default
        for locate in self.locators:
            value = locate(record)
            if is_present(value):
                return value
        return self.default


LOAN_AMOUNT = FieldRule(
    name="loan_amount",
    kind=EntityKind.BANK_LOANS,
    locators=(
        field("loanAmount"),
        phase_field(PhaseType.BANK_OFFERS, "selectedOffer", "totalAmount"),
        phase_field(PhaseType.DEALERSHIP_PRICING, "salePrice"),
    ),
    default=None,
)
CUSTOMER_NAME = FieldRule(
    name="customer_name",
    kind=EntityKind.BANK_LOANS,
    locators=(
        field("customer", "name"),
        field("clientInfo", "name"),
        phase_field(PhaseType.CLIENT_PERSONAL_INFO, "name"),
    ),
    default=UNKNOWN,
)
CUSTOMER_PHONE = FieldRule(
    name="customer_phone",
    kind=EntityKind.BANK_LOANS,
    locators=(field("customer", "phone"), field("clientInfo", "phone")),
    default=NO_PHONE,
)
CUSTOMER_NATIONAL_ID = FieldRule(
    name="customer_national_id",
    kind=EntityKind.BANK_LOANS,
    locators=(field("customer", "nationalId"), field("clientInfo", "nationalId")),
    default=EMPTY,
)
DEALERSHIP_NAME = FieldRule(
    name="dealership_name",
    kind=EntityKind.BANK_LOANS,
    locators=(
        field("dealership", "name"),
        phase_field(PhaseType.DEALERSHIP_SELECTION, "dealership", "name"),
        phase_field(PhaseType.DEALERSHIP_SELECTION, "dealershipName"),
    ),
    default=EMPTY,
)
DEALERSHIP_CODE = FieldRule(
    name="dealership_code",
    kind=EntityKind.BANK_LOANS,
    locators=(phase_field(PhaseType.DEALERSHIP_SELECTION, "dealershipCode"),),
    default=EMPTY,
)
BANK_NAME = FieldRule(
    name="bank_name",
    kind=EntityKind.BANK_LOANS,
    locators=(field("bank", "name"),),
    default=UNKNOWN_BANK,
)
DEALER_PHONE = FieldRule(
    name="dealer_phone",
    kind=EntityKind.DEALERS,
    locators=(field("contactPhone"),),
    default=NOT_AVAILABLE,
)
DEALER_COUNTRY = FieldRule(
    name="dealer_country",
    kind=EntityKind.DEALERS,
    locators=(field("address", "country"),),
    default=DEFAULT_COUNTRY,
)
USER_COUNTRY = FieldRule(
    name="user_country",
    kind=EntityKind.USERS,
    locators=(field("globalPreferences", "country"),),
    default=DEFAULT_COUNTRY,
)
BANK_CONTACT_PHONE = FieldRule(
    name="bank_contact_phone",
    kind=EntityKind.BANKS,
    locators=(field("contactPerson", "phone"),),
    default=DASH,
)
BANK_CONTACT_NAME = FieldRule(
    name="bank_contact_name",
    kind=EntityKind.BANKS,
    locators=(field("contactPerson", "name"),),
    default=EMPTY,
)
ASSIGNEE_NAME = FieldRule(
    name="assignee_name",
    kind=None,
    locators=(field("userName"), field("user", "name")),
    default=DEFAULT_ASSIGNEE,
)

FIELD_RULES: dict[str, FieldRule] = {
    rule.name: rule
    for rule in (
        LOAN_AMOUNT,
        CUSTOMER_NAME,
        CUSTOMER_PHONE,
        CUSTOMER_NATIONAL_ID,
        DEALERSHIP_NAME,
        DEALERSHIP_CODE,
        BANK_NAME,
        DEALER_PHONE,
        DEALER_COUNTRY,
        USER_COUNTRY,
        BANK_CONTACT_PHONE,
        BANK_CONTACT_NAME,
        ASSIGNEE_NAME,
    )
}


def loan_amount(loan: Record) -> Any:
    return LOAN_AMOUNT.derive(loan)


def customer_name(loan: Record) -> str:
    return CUSTOMER_NAME.derive(loan)


def dealership_name(loan: Record) -> str:
    return DEALERSHIP_NAME.derive(loan)


def bank_name(loan: Record) -> str:
    return BANK_NAME.derive(loan)


def vehicle_title(loan: Record) -> str:
    vehicle = loan.get("vehicle") or {}
    parts = [
        str(vehicle[key])
        for key in ("year", "make", "model")
        if is_present(vehicle.get(key))
    ]
    return " ".join(parts) or DASH


def display_id(kind: EntityKind, record: Record) -> str:
    """Short identifier shown in the first table column."""
    if kind is EntityKind.DEALERS and is_present(record.get("code")):
        return f"#{record['code']}"
    record_id = str(record.get("_id") or record.get("id") or "")
    return f"#{record_id[-8:].upper()}" if record_id else DASH


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def time_left(deadline: Any, now: datetime | None = None) -> str:
    """Countdown text for a phase deadline.

    Args:
        deadline: Deadline timestamp (ISO string or datetime).
        now: Reference time, defaults to the current UTC time.

    Returns:
        `Expired` once the deadline passed, otherwise the remaining time with
        leading zero units dropped, e.g. `2h 5mins 0sec`, `3mins 10sec`.

    """
    deadline_at = parse_timestamp(deadline)
    if deadline_at is None:
        return NO_DEADLINE

    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    remaining = (deadline_at - now).total_seconds()
    if remaining <= 0:
        return EXPIRED

    total = int(remaining)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}mins {seconds}sec"
    if minutes > 0:
        return f"{minutes}mins {seconds}sec"
    return f"{seconds}sec"


def sorted_phases(loan: Record) -> list[Record]:
    phases = [phase for phase in loan.get("phases") or [] if isinstance(phase, dict)]
    return sorted(phases, key=lambda phase: phase.get("order") or 0)


def phase_title(phase: Record) -> str:
    if is_present(phase.get("title")):
        return str(phase["title"])
    text = str(phase.get("type") or "").replace("_", " ")
    return re.sub(r"\b\w", lambda match: match.group().upper(), text)


def phase_status(phase: Record | None) -> str:
    if not phase:
        return PhaseStatus.NOT_STARTED
    return str(phase.get("status") or PhaseStatus.NOT_STARTED)


def phase_progress(phase: Record | None) -> int:
    status = phase_status(phase)
    if status in PhaseStatus.get_done():
        return 100
    if status in (PhaseStatus.IN_PROGRESS, PhaseStatus.EDITS_REQUIRED):
        return 50
    return 0


def phase_tone(phase: Record | None) -> str:
    """Colour of the phase progress bar."""
    progress = phase_progress(phase)
    status = phase_status(phase)
    if progress == 0 or status == PhaseStatus.NOT_STARTED:
        return "gray"
    if status in PhaseStatus.get_failed():
        return "red"
    if progress == 100:
        return "green"
    return "yellow"


def phase_status_label(phase: Record | None) -> str:
    status = phase_status(phase)
    if status in PhaseStatus.get_done():
        return "Complete"
    return {
        PhaseStatus.IN_PROGRESS: "In Progress",
        PhaseStatus.EDITS_REQUIRED: "Edits Required",
        PhaseStatus.REJECTED: "Rejected",
    }.get(status, "Pending")


def assignee_status_label(assignee: Record) -> str:
    status = str(assignee.get("status") or "")
    if not status or status == "pending":
        return EMPTY
    return "Approved" if status == "complete" else status
