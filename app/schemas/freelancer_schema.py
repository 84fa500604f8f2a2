# app/schemas/freelancer_schema.py
from pydantic import Field, StringConstraints, field_validator
from typing import Annotated, List, Optional
from app.schemas.common_schema import CamelModel
from app.schemas.master_data_schema import MasterRecordOut

# 以名稱指定的技能 / 興趣，去除前後空白後最多 100 字 (與主檔名稱上限相同)
MasterName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]

# --- 基礎欄位 (對應 Model) ---
class FreelancerBase(CamelModel):
    username: str = Field(..., max_length=100)
    email: str = Field(..., max_length=200)
    phone_number: Optional[str] = Field("", max_length=30)
    is_archived: bool = False

# --- 建立 / 整筆更新 (PUT) 的 Request Body ---
class FreelancerRequest(FreelancerBase):
    # 技能 / 興趣可以用 ID 或名稱指定，兩者可混用
    # 名稱不存在時會自動建立主檔
    skillset_ids: List[str] = []
    hobby_ids: List[str] = []
    skillsets: List[MasterName] = []
    hobbies: List[MasterName] = []

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Username is required")
        return value.strip()

    @field_validator("email")
    @classmethod
    def email_has_at(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Email is required")
        if "@" not in value:
            raise ValueError("Email must contain '@'")
        return value

    @field_validator("phone_number")
    @classmethod
    def phone_default_empty(cls, value: Optional[str]) -> str:
        return value or ""

# --- PATCH：目前只支援切換封存狀態 ---
class FreelancerArchiveUpdate(CamelModel):
    is_archived: bool

# --- 回傳給前端的工作者資料 (Output) ---
class FreelancerOut(FreelancerBase):
    id: str
    # (重要) 關聯列已在 Model 上攤平成主檔列表
    skillsets: List[MasterRecordOut] = []
    hobbies: List[MasterRecordOut] = []
