# app/models/freelancer.py
import uuid
from sqlalchemy import Column, String, Boolean, ForeignKey, CHAR
from sqlalchemy.orm import relationship
from app.core.database import Base

class Freelancer(Base):
    __tablename__ = "freelancers"
    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(200), unique=True, nullable=False, index=True)
    phone_number = Column(String(30), default="")
    is_archived = Column(Boolean, default=False, nullable=False)

    # 建立與 FreelancerSkillset / FreelancerHobby 的 '多' 關聯
    # lazy="selectin": 非同步環境下序列化時不可觸發隱式 IO，所以一律預先載入
    skill_links = relationship(
        "FreelancerSkillset",
        back_populates="freelancer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    hobby_links = relationship(
        "FreelancerHobby",
        back_populates="freelancer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    # 攤平關聯列，供 FreelancerOut Schema 直接讀取 (依名稱排序)
    @property
    def skillsets(self):
        return sorted(
            (link.skillset for link in self.skill_links if link.skillset is not None),
            key=lambda s: s.name.lower(),
        )

    @property
    def hobbies(self):
        return sorted(
            (link.hobby for link in self.hobby_links if link.hobby is not None),
            key=lambda h: h.name.lower(),
        )


class FreelancerSkillset(Base):
    """工作者 <-> 技能 關聯表，複合主鍵 (freelancer_id, skillset_id)"""
    __tablename__ = "freelancer_skillsets"
    freelancer_id = Column(
        CHAR(36), ForeignKey("freelancers.id", ondelete="CASCADE"), primary_key=True
    )
    skillset_id = Column(
        CHAR(36), ForeignKey("skillsets.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    freelancer = relationship("Freelancer", back_populates="skill_links")
    # 關聯回 Skillset (一)
    skillset = relationship("Skillset", back_populates="freelancer_links", lazy="selectin")


class FreelancerHobby(Base):
    """工作者 <-> 興趣 關聯表，複合主鍵 (freelancer_id, hobby_id)"""
    __tablename__ = "freelancer_hobbies"
    freelancer_id = Column(
        CHAR(36), ForeignKey("freelancers.id", ondelete="CASCADE"), primary_key=True
    )
    hobby_id = Column(
        CHAR(36), ForeignKey("hobbies.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    freelancer = relationship("Freelancer", back_populates="hobby_links")
    hobby = relationship("Hobby", back_populates="freelancer_links", lazy="selectin")
