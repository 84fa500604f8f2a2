# app/models/skillset.py
import uuid
from sqlalchemy import Column, String, CHAR, Index, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class Skillset(Base):
    """技能主檔 (例如 "C#", "SQL", "React")，由多位工作者共用"""
    __tablename__ = "skillsets"
    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)

    # 關聯到 FreelancerSkillset (多)
    # 刪除技能時一併刪除所有引用它的關聯列，交給資料庫的 ON DELETE CASCADE 處理
    freelancer_links = relationship(
        "FreelancerSkillset",
        back_populates="skillset",
        cascade="all",
        passive_deletes=True,
    )

# 名稱不分大小寫唯一 (lower(name) 的唯一索引是最終的仲裁者)
Index("uq_skillsets_name_lower", func.lower(Skillset.name), unique=True)
