# app/schemas/master_data_schema.py
# 技能 (Skillset) 與興趣 (Hobby) 共用的主檔 Schema
from pydantic import Field, field_validator
from app.schemas.common_schema import CamelModel

class MasterRecordOut(CamelModel):
    id: str
    name: str

# 建立 / 改名時的 Request Body
class MasterRecordIn(CamelModel):
    name: str = Field(..., max_length=100, examples=["C#"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value
