# File: /docview/routers/modules.py | Version: 1.0 | Title: Module registry endpoints
from typing import List

from fastapi import APIRouter, Depends

from docview.dependencies import get_registry
from docview.engine.registry import ModuleRegistry
from docview.schemas.module import FrozenConfig, ModuleOut
from docview.security import get_current_owner

router = APIRouter(prefix="/modules", tags=["Modules"])


@router.get("", response_model=List[ModuleOut], summary="List registered modules")
def list_modules(
    registry: ModuleRegistry = Depends(get_registry),
    _owner: str = Depends(get_current_owner),
):
    return [m.to_out() for m in registry.list()]


@router.get("/{module_id}/frozen-config", response_model=FrozenConfig, summary="Module FrozenConfig")
def frozen_config(
    module_id: str,
    registry: ModuleRegistry = Depends(get_registry),
    _owner: str = Depends(get_current_owner),
):
    return registry.get(module_id).frozen_config
