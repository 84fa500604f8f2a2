# app/schemas/common_schema.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Generic, List, TypeVar

T = TypeVar("T")

class CamelModel(BaseModel):
    """
    API 對外使用 camelCase (isArchived, pageSize...)，
    但同時接受 snake_case 欄位名稱
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

# 分頁回傳格式
class PagedResultOut(CamelModel, Generic[T]):
    items: List[T] = []
    total_count: int = Field(..., description="篩選後、分頁前的總筆數")
    page: int
    page_size: int
    total_pages: int
