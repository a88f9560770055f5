# File: /docview/routers/properties.py | Version: 1.0 | Title: Property Schema endpoints
from typing import List

from fastapi import APIRouter, Depends, status

from docview.dependencies import get_property_schema
from docview.schemas.property import Property, PropertyCreate, PropertyUpdate
from docview.security import get_current_owner
from docview.services.property_schema import PropertySchema

router = APIRouter(prefix="/modules/{module_id}/properties", tags=["Properties"])


@router.get("", response_model=List[Property], summary="Module property schema (ordered)")
def get_schema(
    module_id: str,
    schema: PropertySchema = Depends(get_property_schema),
    _owner: str = Depends(get_current_owner),
):
    return schema.get_schema(module_id)


@router.post("", response_model=Property, status_code=status.HTTP_201_CREATED, summary="Add a property")
def add_property(
    module_id: str,
    data: PropertyCreate,
    schema: PropertySchema = Depends(get_property_schema),
    _owner: str = Depends(get_current_owner),
):
    return schema.add_property(module_id, data)


@router.patch("/{property_id}", response_model=Property, summary="Update a property")
def update_property(
    module_id: str,
    property_id: str,
    data: PropertyUpdate,
    schema: PropertySchema = Depends(get_property_schema),
    _owner: str = Depends(get_current_owner),
):
    return schema.update_property(module_id, property_id, data)


@router.delete("/{property_id}", summary="Delete a property (cascades into views)")
def delete_property(
    module_id: str,
    property_id: str,
    schema: PropertySchema = Depends(get_property_schema),
    _owner: str = Depends(get_current_owner),
):
    schema.delete_property(module_id, property_id)
    return {"detail": "Property deleted"}
