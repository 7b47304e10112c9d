"""Property and tenant service for business logic."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from propdash.models.property import Property, Tenant
from propdash.schemas.property import PropertyCreate, PropertyUpdate, TenantCreate


def create_tenant(db: Session, tenant_data: TenantCreate) -> Tenant:
    """Create a new tenant."""
    db_tenant = Tenant(**tenant_data.model_dump())
    db.add(db_tenant)
    db.commit()
    db.refresh(db_tenant)
    return db_tenant


def get_tenant(db: Session, tenant_id: int) -> Tenant:
    """Get a tenant by ID."""
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found",
        )
    return tenant


def get_tenants(db: Session, skip: int = 0, limit: int = 100) -> list[Tenant]:
    """Get all tenants with pagination."""
    return db.query(Tenant).offset(skip).limit(limit).all()


def create_property(db: Session, property_data: PropertyCreate) -> Property:
    """Create a new property, optionally rented to an existing tenant."""
    if property_data.tenant_id is not None:
        get_tenant(db, property_data.tenant_id)

    db_property = Property(**property_data.model_dump())
    db.add(db_property)
    db.commit()
    db.refresh(db_property)
    return db_property


def get_property(db: Session, property_id: int) -> Property:
    """Get a property by ID."""
    db_property = db.query(Property).filter(Property.id == property_id).first()
    if not db_property:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )
    return db_property


def get_properties(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    active_only: bool = False,
) -> list[Property]:
    """Get all properties with pagination."""
    query = db.query(Property)
    if active_only:
        query = query.filter(Property.is_active.is_(True))
    return query.order_by(Property.id).offset(skip).limit(limit).all()


def get_active_properties(db: Session) -> list[Property]:
    """Get every active property, without pagination."""
    return db.query(Property).filter(Property.is_active.is_(True)).order_by(Property.id).all()


def get_linkable_properties(db: Session) -> list[Property]:
    """Get every active property that names an energy unit, without pagination."""
    return (
        db.query(Property)
        .filter(Property.is_active.is_(True), Property.energy_unit_name.is_not(None))
        .order_by(Property.id)
        .all()
    )


def update_property(
    db: Session,
    property_id: int,
    property_data: PropertyUpdate,
) -> Property:
    """Update a property."""
    db_property = get_property(db, property_id)

    update_data = property_data.model_dump(exclude_unset=True)
    if update_data.get("tenant_id") is not None:
        get_tenant(db, update_data["tenant_id"])

    for field, value in update_data.items():
        setattr(db_property, field, value)

    db.commit()
    db.refresh(db_property)
    return db_property


def delete_property(db: Session, property_id: int) -> None:
    """Soft-delete a property by deactivating it."""
    db_property = get_property(db, property_id)
    db_property.is_active = False
    db.commit()
