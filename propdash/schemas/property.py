"""Property and tenant Pydantic schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, model_validator

from propdash.models.enums import PropertyStatus


class TenantCreate(BaseModel):
    """Schema for creating a tenant."""

    name: str
    email: str | None = None
    phone: str | None = None


class TenantResponse(TenantCreate):
    """Schema for tenant response."""

    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class PropertyBase(BaseModel):
    """Base property schema."""

    display_name: str


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""

    address: str | None = None
    energy_unit_name: str | None = None
    status: PropertyStatus = PropertyStatus.VACANT
    purchase_price: Decimal = Decimal("0")
    monthly_rent: Decimal = Decimal("0")
    tenant_id: int | None = None


class PropertyUpdate(BaseModel):
    """Schema for updating a property."""

    display_name: str | None = None
    address: str | None = None
    energy_unit_name: str | None = None
    status: PropertyStatus | None = None
    purchase_price: Decimal | None = None
    monthly_rent: Decimal | None = None
    tenant_id: int | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def check_at_least_one_field(self) -> "PropertyUpdate":
        """Ensure at least one field is provided for update."""
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class PropertyResponse(PropertyBase):
    """Schema for property response."""

    id: int
    address: str | None
    energy_unit_name: str | None
    status: PropertyStatus
    purchase_price: Decimal
    monthly_rent: Decimal
    tenant: TenantResponse | None
    created_at: datetime
    is_active: bool

    model_config = {"from_attributes": True}
