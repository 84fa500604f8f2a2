# app/services/master_data_service.py
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import DuplicateRecordError, EntityNotFoundError, ValidationError
from app.repositories.master_data_repo import MAX_NAME_LENGTH, MasterDataRepository, MasterKind
from app.utils.pagination import PagedResult, normalize_paging

logger = logging.getLogger(__name__)


class MasterDataService:
    """技能 / 興趣主檔的 CRUD (兩者邏輯相同，以 kind 區分資料表)"""

    def __init__(self, db: AsyncSession, kind: MasterKind):
        self.db = db
        self.kind = kind
        self.repo = MasterDataRepository(db, kind)

    def _clean_name(self, name: Optional[str]) -> str:
        # 去除前後空白後不可為空，長度上限 MAX_NAME_LENGTH
        name = (name or "").strip()
        if not name:
            raise ValidationError(self.kind.value, name, "Name is required")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(self.kind.value, name, f"Name must be at most {MAX_NAME_LENGTH} characters")
        return name

    async def _get_or_404(self, record_id: str):
        record = await self.repo.get_by_id(record_id)
        if not record:
            raise EntityNotFoundError(self.kind.value, record_id)
        return record

    async def get_master(self, record_id: str):
        return await self._get_or_404(record_id)

    async def query_master(
        self, page: int = 1, page_size: int = 10, term: Optional[str] = None
    ) -> PagedResult:
        page, page_size = normalize_paging(
            page, page_size, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE
        )
        term = term.strip() if term and term.strip() else None
        items, total = await self.repo.list_paged(page, page_size, term)
        return PagedResult(items=items, total_count=total, page=page, page_size=page_size)

    async def create_master(self, name: str):
        name = self._clean_name(name)
        if await self.repo.get_by_name(name):
            raise DuplicateRecordError(self.kind.value, name)
        record = await self.repo.create(name)
        logger.info(f"建立 {self.kind.value}: {record.name} ({record.id})")
        return record

    async def rename_master(self, record_id: str, name: str):
        name = self._clean_name(name)
        record = await self._get_or_404(record_id)
        if await self.repo.get_by_name(name, exclude_id=record_id):
            raise DuplicateRecordError(self.kind.value, name)
        record = await self.repo.rename(record, name)
        logger.info(f"{self.kind.value} {record_id} 改名為 {name}")
        return record

    async def delete_master(self, record_id: str) -> None:
        record = await self._get_or_404(record_id)
        await self.repo.delete(record)
        logger.info(f"刪除 {self.kind.value} {record_id}")
