# app/repositories/master_data_repo.py
# 技能 (Skillset) 與興趣 (Hobby) 主檔共用的資料存取層
import enum
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, literal
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.exceptions import DuplicateRecordError
from app.models.hobby import Hobby
from app.models.skillset import Skillset
from app.utils.pagination import page_offset

logger = logging.getLogger(__name__)

class MasterKind(str, enum.Enum):
    SKILLSET = "Skillset"
    HOBBY = "Hobby"

MASTER_MODELS = {
    MasterKind.SKILLSET: Skillset,
    MasterKind.HOBBY: Hobby,
}

MAX_NAME_LENGTH = 100

# 大小寫轉換一律交給資料庫的 lower()，與 lower(name) 唯一索引的規則一致
# (SQLite 的 lower() 只轉換 ASCII，Python 的 str.lower() 與它不一致)

def contains_ci(column, text: str):
    """不分大小寫的子字串比對 (會跳脫 % 與 _)"""
    return column.icontains(text, autoescape=True)

def equals_ci(column, text: str):
    return func.lower(column) == func.lower(text)


class MasterDataRepository:
    def __init__(self, db: AsyncSession, kind: MasterKind):
        self.db = db
        self.kind = kind
        self.model = MASTER_MODELS[kind]

    async def get_by_id(self, record_id: str):
        stmt = select(self.model).where(self.model.id == record_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_by_ids(self, record_ids: Iterable[str]) -> List:
        record_ids = list(record_ids)
        if not record_ids:
            return []
        stmt = select(self.model).where(self.model.id.in_(record_ids))
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def fold_names(self, names: Iterable[str]) -> Dict[str, str]:
        """回傳 {原名稱: 資料庫 lower() 後的名稱}"""
        names = list(names)
        if not names:
            return {}
        stmt = select(
            *[func.lower(literal(name)).label(f"name_{i}") for i, name in enumerate(names)]
        )
        row = (await self.db.execute(stmt)).one()
        return dict(zip(names, row))

    async def list_by_names(self, folded_names: Iterable[str]) -> List[Tuple[object, str]]:
        """
        依 fold_names() 的結果查出已存在的主檔
        回傳 (主檔, lower(name)) 列表
        """
        folded_names = list(set(folded_names))
        if not folded_names:
            return []
        folded_column = func.lower(self.model.name)
        stmt = select(self.model, folded_column).where(folded_column.in_(folded_names))
        result = await self.db.execute(stmt)
        return [(record, folded) for record, folded in result.all()]

    async def get_by_name(self, name: str, exclude_id: Optional[str] = None):
        stmt = select(self.model).where(equals_ci(self.model.name, name))
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_paged(
        self, page: int, page_size: int, term: Optional[str] = None
    ) -> Tuple[List, int]:
        """依名稱排序的分頁查詢，回傳 (當頁資料, 篩選後總筆數)"""
        conditions = []
        if term:
            conditions.append(contains_ci(self.model.name, term))

        count_stmt = select(func.count(self.model.id)).where(*conditions)
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(self.model.name.asc(), self.model.id.asc())
            .offset(page_offset(page, page_size))
            .limit(page_size)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all(), total

    async def add_pending(self, records: List) -> List:
        """
        新增主檔並立即 flush (不 commit)，
        讓同一個交易中後續的查詢看得到，最後與工作者一起 commit
        """
        if not records:
            return records
        names = [record.name for record in records]
        self.db.add_all(records)
        try:
            await self.db.flush()
        except IntegrityError:
            # 併發時另一個請求先寫入了同名主檔，由唯一索引擋下
            await self.db.rollback()
            logger.warning(f"Unique constraint hit for {self.kind.value}: {names}")
            raise DuplicateRecordError(self.kind.value, ", ".join(names))
        logger.info(f"新增 {self.kind.value}: {names}")
        return records

    async def create(self, name: str):
        record = self.model(name=name)
        self.db.add(record)
        await self._commit_or_conflict(name)
        await self.db.refresh(record)
        return record

    async def rename(self, record, name: str):
        record.name = name
        await self._commit_or_conflict(name)
        await self.db.refresh(record)
        return record

    async def delete(self, record) -> None:
        # 關聯列由 ON DELETE CASCADE 清除
        await self.db.delete(record)
        await self.db.commit()

    async def _commit_or_conflict(self, name: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateRecordError(self.kind.value, name)
