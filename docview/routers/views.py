# File: /docview/routers/views.py | Version: 3.0 | Title: Document Views CRUD (owner-scoped, per module)
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from docview.dependencies import get_view_store
from docview.schemas.view import View, ViewCreate, ViewDuplicate, ViewUpdate
from docview.security import get_current_owner
from docview.services.view_store import ViewStore

router = APIRouter(prefix="/modules/{module_id}/views", tags=["Views"])


@router.get("", response_model=List[View], summary="List my views of a module")
def list_views(
    module_id: str,
    store: ViewStore = Depends(get_view_store),
    owner_id: str = Depends(get_current_owner),
):
    return store.list_views(module_id, owner_id)


@router.post("", response_model=View, status_code=status.HTTP_201_CREATED, summary="Create a view")
def create_view(
    module_id: str,
    data: ViewCreate,
    store: ViewStore = Depends(get_view_store),
    owner_id: str = Depends(get_current_owner),
):
    return store.create_view(module_id, owner_id, data)


@router.get("/{view_id}", response_model=View, summary="Get a view")
def get_view(
    module_id: str,
    view_id: str,
    store: ViewStore = Depends(get_view_store),
    owner_id: str = Depends(get_current_owner),
):
    return store.get_view(module_id, owner_id, view_id)


@router.patch("/{view_id}", response_model=View, summary="Update a view")
def update_view(
    module_id: str,
    view_id: str,
    data: ViewUpdate,
    store: ViewStore = Depends(get_view_store),
    owner_id: str = Depends(get_current_owner),
):
    return store.update_view(module_id, owner_id, view_id, data)


@router.delete("/{view_id}", summary="Delete a view")
def delete_view(
    module_id: str,
    view_id: str,
    store: ViewStore = Depends(get_view_store),
    owner_id: str = Depends(get_current_owner),
):
    store.delete_view(module_id, owner_id, view_id)
    return {"detail": "View deleted"}


@router.post(
    "/{view_id}/duplicate",
    response_model=View,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate a view",
)
def duplicate_view(
    module_id: str,
    view_id: str,
    data: Optional[ViewDuplicate] = Body(default=None),
    store: ViewStore = Depends(get_view_store),
    owner_id: str = Depends(get_current_owner),
):
    return store.duplicate_view(module_id, owner_id, view_id, name=data.name if data else None)


@router.post("/{view_id}/default", response_model=View, summary="Make a view the default")
def set_default(
    module_id: str,
    view_id: str,
    store: ViewStore = Depends(get_view_store),
    owner_id: str = Depends(get_current_owner),
):
    return store.set_default(module_id, owner_id, view_id)
