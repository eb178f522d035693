"""Routes for curriculum modules."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from skillquest.database import get_session
from skillquest.models import Module
from skillquest.schemas import ModuleCreate, ModuleRead
from skillquest.crud import create_module, get_all_modules, get_module

router = APIRouter(prefix="/modules", tags=["modules"])


@router.post("/", response_model=ModuleRead)
async def create_module_route(
    data: ModuleCreate, db: AsyncSession = Depends(get_session)
):
    module = Module(
        title=data.title,
        description=data.description,
        order=data.order,
        is_active=True,
    )
    return await create_module(db, module)


@router.get("/", response_model=list[ModuleRead])
async def list_modules(db: AsyncSession = Depends(get_session)):
    """All modules in traversal order."""
    return await get_all_modules(db)


@router.get("/{module_id}", response_model=ModuleRead | None)
async def read_module(module_id: int, db: AsyncSession = Depends(get_session)):
    return await get_module(db, module_id)
