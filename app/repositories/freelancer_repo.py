# app/repositories/freelancer_repo.py
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.core.exceptions import DuplicateRecordError
from app.models.freelancer import Freelancer, FreelancerSkillset, FreelancerHobby
from app.models.hobby import Hobby
from app.models.skillset import Skillset
from app.repositories.master_data_repo import contains_ci, equals_ci
from app.utils.pagination import page_offset

logger = logging.getLogger(__name__)


@dataclass
class FreelancerQuery:
    """
    單次查詢的條件 (已校正過的分頁參數 + 篩選條件)
    由 Service 依每個 request 建立，不共用
    """
    page: int = 1
    page_size: int = 10
    include_archived: bool = False
    term: Optional[str] = None
    skill_tokens: List[str] = field(default_factory=list)
    hobby_tokens: List[str] = field(default_factory=list)


def _tag_condition(name_column, tokens: List[str]):
    """
    技能 / 興趣篩選
    - 只有一個 token：名稱包含該字串 (不分大小寫)
    - 多個 token：名稱等於任一 token (不分大小寫，OR，只要符合一個即可)
    """
    if len(tokens) == 1:
        return contains_ci(name_column, tokens[0])
    return or_(*[equals_ci(name_column, token) for token in tokens])


class FreelancerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _eager_options(self):
        # 明確指定 Eager Loading (技能 / 興趣關聯列 + 主檔)
        return (
            selectinload(Freelancer.skill_links).selectinload(FreelancerSkillset.skillset),
            selectinload(Freelancer.hobby_links).selectinload(FreelancerHobby.hobby),
        )

    async def get_freelancer_by_id(self, freelancer_id: str) -> Freelancer | None:
        """
        透過 ID 獲取單一工作者 (包含技能、興趣)
        populate_existing: 同一個 Session 內重新查詢時，覆蓋 identity map 中的舊資料
        """
        stmt = (
            select(Freelancer)
            .where(Freelancer.id == freelancer_id)
            .options(*self._eager_options())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def find_conflict(
        self, username: str, email: str, exclude_id: Optional[str] = None
    ) -> Freelancer | None:
        """
        找出 username 或 email 相同的 "其他" 工作者 (含已封存)
        只是為了給出較友善的錯誤，最終仍以資料庫唯一索引為準
        """
        stmt = select(Freelancer).where(
            or_(Freelancer.username == username, Freelancer.email == email)
        )
        if exclude_id is not None:
            stmt = stmt.where(Freelancer.id != exclude_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    def _filter_conditions(self, query: FreelancerQuery) -> list:
        conditions = []

        # 1. 預設排除已封存
        if not query.include_archived:
            conditions.append(Freelancer.is_archived == False)

        # 2. username / email 模糊比對
        if query.term:
            conditions.append(
                or_(contains_ci(Freelancer.username, query.term), contains_ci(Freelancer.email, query.term))
            )

        # 3. 技能 / 興趣：使用 EXISTS 子查詢，一位工作者符合多個標籤也只會出現一次
        if query.skill_tokens:
            conditions.append(
                Freelancer.skill_links.any(
                    FreelancerSkillset.skillset.has(_tag_condition(Skillset.name, query.skill_tokens))
                )
            )
        if query.hobby_tokens:
            conditions.append(
                Freelancer.hobby_links.any(
                    FreelancerHobby.hobby.has(_tag_condition(Hobby.name, query.hobby_tokens))
                )
            )
        return conditions

    async def list_freelancers(self, query: FreelancerQuery) -> Tuple[List[Freelancer], int]:
        """
        (核心功能) 依條件複合式搜尋工作者，回傳 (當頁資料, 篩選後總筆數)
        排序固定為 username 升冪，同名時以 id 升冪，確保分頁穩定
        """
        conditions = self._filter_conditions(query)
        logger.info(f"Applying freelancer filters: {query}")

        count_stmt = select(func.count(Freelancer.id)).where(*conditions)
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            select(Freelancer)
            .where(*conditions)
            .options(*self._eager_options())
            .order_by(Freelancer.username.asc(), Freelancer.id.asc())
            .offset(page_offset(query.page, query.page_size))
            .limit(query.page_size)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all(), total

    async def create_freelancer(self, freelancer: Freelancer) -> Freelancer:
        """新增工作者 (連同關聯列一起寫入)"""
        self.db.add(freelancer)
        await self._commit_or_conflict(freelancer)

        # 不使用 refresh()，重新查詢一次以取得完整 (含 Eager Loading) 的物件
        complete = await self.get_freelancer_by_id(freelancer.id)
        return complete

    async def replace_links(self, freelancer: Freelancer, skillsets: List, hobbies: List) -> None:
        """
        整批覆蓋技能 / 興趣關聯 (不做差異比對)
        先清空 (delete-orphan 會刪除舊關聯列)，再加入新的
        (注意) commit 由上層的 update_freelancer 執行
        """
        freelancer.skill_links.clear()
        freelancer.hobby_links.clear()
        await self.db.flush() # 確保 DELETE 執行

        for skillset in skillsets:
            freelancer.skill_links.append(FreelancerSkillset(skillset=skillset))
        for hobby in hobbies:
            freelancer.hobby_links.append(FreelancerHobby(hobby=hobby))

    async def update_freelancer(self, freelancer: Freelancer) -> Freelancer:
        """儲存對現有 Freelancer 物件的變更"""
        await self._commit_or_conflict(freelancer)
        refreshed = await self.get_freelancer_by_id(freelancer.id)
        return refreshed

    async def delete_freelancer(self, freelancer: Freelancer) -> None:
        # 關聯列由 cascade 一併刪除
        await self.db.delete(freelancer)
        await self.db.commit()

    async def _commit_or_conflict(self, freelancer: Freelancer) -> None:
        username, email = freelancer.username, freelancer.email
        try:
            await self.db.commit()
        except IntegrityError:
            # 預先檢查之後仍被唯一索引擋下 (併發寫入)
            await self.db.rollback()
            logger.warning(f"Unique constraint hit for freelancer {username} / {email}")
            raise DuplicateRecordError("Freelancer", f"{username} / {email}")
