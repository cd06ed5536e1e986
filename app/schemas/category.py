from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    """Category listing item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: str | None = None
