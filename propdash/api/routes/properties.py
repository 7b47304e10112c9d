"""Property and tenant API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from propdash.core.database import get_db
from propdash.schemas.property import (
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
    TenantCreate,
    TenantResponse,
)
from propdash.services import property as property_service

router = APIRouter(prefix="/properties", tags=["properties"])
tenants_router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post("/", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    property_data: PropertyCreate,
    db: Session = Depends(get_db),
):
    """Create a new property."""
    return property_service.create_property(db, property_data)


@router.get("/", response_model=list[PropertyResponse])
def list_properties(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    active_only: bool = Query(False, description="Only return active properties"),
    db: Session = Depends(get_db),
):
    """List all properties."""
    return property_service.get_properties(db, skip, limit, active_only)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int,
    db: Session = Depends(get_db),
):
    """Get a property by ID."""
    return property_service.get_property(db, property_id)


@router.patch("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    property_data: PropertyUpdate,
    db: Session = Depends(get_db),
):
    """Update a property."""
    return property_service.update_property(db, property_id, property_data)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: int,
    db: Session = Depends(get_db),
) -> None:
    """Soft-delete a property (deactivates it)."""
    property_service.delete_property(db, property_id)


@tenants_router.post("/", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(
    tenant_data: TenantCreate,
    db: Session = Depends(get_db),
):
    """Create a new tenant."""
    return property_service.create_tenant(db, tenant_data)


@tenants_router.get("/", response_model=list[TenantResponse])
def list_tenants(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """List all tenants."""
    return property_service.get_tenants(db, skip, limit)
