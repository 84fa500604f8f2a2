# app/services/freelancer_service.py
import logging
import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import DuplicateRecordError, EntityNotFoundError
from app.models.freelancer import Freelancer, FreelancerSkillset, FreelancerHobby
from app.repositories.freelancer_repo import FreelancerQuery, FreelancerRepository
from app.repositories.master_data_repo import MasterKind
from app.schemas.freelancer_schema import FreelancerRequest
from app.services.master_data_resolver import MasterDataResolver, build_references
from app.utils.pagination import PagedResult, normalize_paging, split_filter_tokens

logger = logging.getLogger(__name__)

class FreelancerService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = FreelancerRepository(db)
        self.resolver = MasterDataResolver(db)

    # 輔助函式：取得工作者，不存在就拋出 404
    async def _get_or_404(self, freelancer_id: str) -> Freelancer:
        freelancer = await self.repo.get_freelancer_by_id(freelancer_id)
        if not freelancer:
            raise EntityNotFoundError("Freelancer", freelancer_id)
        return freelancer

    async def _ensure_unique(self, username: str, email: str, exclude_id: Optional[str] = None) -> None:
        """username / email 不可與 "其他" 工作者重複 (含已封存)"""
        conflict = await self.repo.find_conflict(username, email, exclude_id=exclude_id)
        if conflict is None:
            return
        key = username if conflict.username == username else email
        raise DuplicateRecordError("Freelancer", key)

    async def _resolve_links(self, data: FreelancerRequest):
        skillsets = await self.resolver.resolve(
            MasterKind.SKILLSET, build_references(data.skillset_ids, data.skillsets)
        )
        hobbies = await self.resolver.resolve(
            MasterKind.HOBBY, build_references(data.hobby_ids, data.hobbies)
        )
        return skillsets, hobbies

    async def get_freelancer(self, freelancer_id: str) -> Freelancer:
        return await self._get_or_404(freelancer_id)

    async def query_freelancers(
        self,
        page: int = 1,
        page_size: int = 10,
        include_archived: bool = False,
        term: Optional[str] = None,
        skill_filter: Optional[str] = None,
        hobby_filter: Optional[str] = None,
    ) -> PagedResult[Freelancer]:
        """
        業務邏輯：分頁搜尋工作者
        每次呼叫都建立自己的查詢條件物件
        """
        page, page_size = normalize_paging(
            page, page_size, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE
        )
        query = FreelancerQuery(
            page=page,
            page_size=page_size,
            include_archived=include_archived,
            term=term.strip() if term and term.strip() else None,
            skill_tokens=split_filter_tokens(skill_filter),
            hobby_tokens=split_filter_tokens(hobby_filter),
        )
        items, total = await self.repo.list_freelancers(query)
        return PagedResult(items=items, total_count=total, page=page, page_size=page_size)

    async def create_freelancer(self, data: FreelancerRequest) -> Freelancer:
        """
        業務邏輯：建立工作者
        1. 檢查 username / email 是否重複
        2. 解析技能 / 興趣引用 (必要時建立主檔)
        3. 工作者與關聯列一次 commit
        """
        await self._ensure_unique(data.username, data.email)
        skillsets, hobbies = await self._resolve_links(data)

        new_freelancer = Freelancer(
            id=str(uuid.uuid4()),
            username=data.username,
            email=data.email,
            phone_number=data.phone_number or "",
            is_archived=data.is_archived,
            skill_links=[FreelancerSkillset(skillset=s) for s in skillsets],
            hobby_links=[FreelancerHobby(hobby=h) for h in hobbies],
        )
        created = await self.repo.create_freelancer(new_freelancer)
        logger.info(f"建立工作者 {created.id} ({created.username})")
        return created

    async def update_freelancer(self, freelancer_id: str, data: FreelancerRequest) -> Freelancer:
        """
        業務邏輯：整筆覆蓋工作者 (PUT)
        技能 / 興趣關聯全部換成這次傳入的內容，沒傳的就會被移除
        """
        freelancer = await self._get_or_404(freelancer_id)
        await self._ensure_unique(data.username, data.email, exclude_id=freelancer_id)

        # (注意) 先處理關聯再改欄位，避免中途 flush 時把未檢查完的欄位寫出去
        skillsets, hobbies = await self._resolve_links(data)
        await self.repo.replace_links(freelancer, skillsets, hobbies)

        freelancer.username = data.username
        freelancer.email = data.email
        freelancer.phone_number = data.phone_number or ""
        freelancer.is_archived = data.is_archived

        updated = await self.repo.update_freelancer(freelancer)
        logger.info(f"更新工作者 {freelancer_id}")
        return updated

    async def archive_freelancer(self, freelancer_id: str, archived: bool) -> Freelancer:
        """業務邏輯：封存 / 取消封存"""
        freelancer = await self._get_or_404(freelancer_id)
        freelancer.is_archived = archived
        updated = await self.repo.update_freelancer(freelancer)
        logger.info(f"工作者 {freelancer_id} 封存狀態 -> {archived}")
        return updated

    async def delete_freelancer(self, freelancer_id: str) -> None:
        """業務邏輯：刪除工作者 (關聯列一併刪除)"""
        freelancer = await self._get_or_404(freelancer_id)
        await self.repo.delete_freelancer(freelancer)
        logger.info(f"刪除工作者 {freelancer_id}")
