from pydantic import Field

from enums import Role
from schemas.common import CamelModel


class AddressRequest(CamelModel):
    street: str | None = Field(default=None, description="Street")
    city: str | None = Field(default=None, description="City")
    state: str | None = Field(default=None, description="State")
    country: str | None = Field(default=None, description="Country")
    postal_code: str | None = Field(default=None, description="Postal code")


class DealerRequest(CamelModel):
    name: str | None = Field(default=None, description="Dealership name")
    code: str | None = Field(default=None, description="Dealership code")
    contact_person: str | None = Field(default=None, description="Contact person")
    contact_phone: str | None = Field(default=None, description="Contact phone")
    contact_email: str | None = Field(default=None, description="Contact email")
    commercial_reg_number: str | None = Field(
        default=None, description="Commercial registration number"
    )
    vat_number: str | None = Field(default=None, description="VAT number")
    address: AddressRequest | None = Field(default=None, description="Address")


class ContactPersonRequest(CamelModel):
    name: str | None = Field(default=None, description="Name")
    email: str | None = Field(default=None, description="Email")
    phone: str | None = Field(default=None, description="Phone")


class BankRequest(CamelModel):
    name: str | None = Field(default=None, description="Bank name")
    code: str | None = Field(default=None, description="Bank code")
    contact_person: ContactPersonRequest | None = Field(
        default=None, description="Contact person"
    )
    is_active: bool | None = Field(default=None, description="Is active")


class UserRequest(CamelModel):
    name: str | None = Field(default=None, description="Name")
    email: str | None = Field(default=None, description="Email")
    phone: str | None = Field(default=None, description="Phone")
    role: Role | None = Field(default=None, description="Role")
    position: str | None = Field(default=None, description="Position")
    is_active: bool | None = Field(default=None, description="Is active")


class CarTypeRequest(CamelModel):
    name: str | None = Field(default=None, description="Name")
    description: str | None = Field(default=None, description="Description")
    icon: str | None = Field(default=None, description="Icon")
    is_active: bool | None = Field(default=None, description="Is active")
    order: int | None = Field(default=None, description="Display order")


class FaqRequest(CamelModel):
    question: str | None = Field(default=None, description="Question")
    answer: str | None = Field(default=None, description="Answer")
    category: str | None = Field(default=None, description="Category")
    is_active: bool | None = Field(default=None, description="Is active")
    order: int | None = Field(default=None, description="Display order")
