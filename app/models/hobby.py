# app/models/hobby.py
import uuid
from sqlalchemy import Column, String, CHAR, Index, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class Hobby(Base):
    __tablename__ = "hobbies"
    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)

    # 關聯到 FreelancerHobby (多)
    freelancer_links = relationship(
        "FreelancerHobby",
        back_populates="hobby",
        cascade="all",
        passive_deletes=True,
    )

Index("uq_hobbies_name_lower", func.lower(Hobby.name), unique=True)
