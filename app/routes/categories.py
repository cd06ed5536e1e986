# app/routes/categories.py

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse

from app.dependencies import CategoryRepoDep, enforce_rate_limit
from app.schemas.category import CategoryResponse

router = APIRouter(
    prefix="/api/categories",
    tags=["🏷️ Categories"],
    dependencies=[Depends(enforce_rate_limit)],
)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[CategoryResponse],
    summary="List categories",
    operation_id="categories_list",
)
async def list_categories(repo: CategoryRepoDep) -> list[CategoryResponse]:
    """All categories ordered by name."""
    return [CategoryResponse.model_validate(category) for category in await repo.list_all()]
