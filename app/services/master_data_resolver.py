# app/services/master_data_resolver.py
# 將 "技能 / 興趣引用" (ID 或名稱) 轉換成實際的主檔資料，名稱不存在時自動建立
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidReferenceError, ValidationError
from app.repositories.master_data_repo import MAX_NAME_LENGTH, MasterDataRepository, MasterKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ById:
    id: str


@dataclass(frozen=True)
class ByName:
    name: str


Reference = Union[ById, ByName]


def build_references(ids: Iterable[str] = (), names: Iterable[str] = ()) -> List[Reference]:
    """把 Request Body 中的 xxxIds / xxx (名稱) 兩個列表合併成引用列表"""
    return [ById(i) for i in ids or []] + [ByName(n) for n in names or []]


def collapse_references(references: Iterable[Reference]) -> Tuple[List[str], List[str]]:
    """
    依引用類型分流，並去除重複
    - ID：完全相同視為重複，空字串忽略
    - 名稱：先 trim，不分大小寫視為重複 (保留第一次出現的寫法)，空白名稱忽略
    """
    ids: Dict[str, None] = {}
    names: Dict[str, str] = {}
    for ref in references:
        if isinstance(ref, ById):
            ref_id = (ref.id or "").strip()
            if ref_id:
                ids.setdefault(ref_id, None)
        elif isinstance(ref, ByName):
            name = (ref.name or "").strip()
            if name:
                names.setdefault(name.lower(), name)
        else:
            raise TypeError(f"Unsupported reference: {ref!r}")
    return list(ids), list(names.values())


class MasterDataResolver:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, kind: MasterKind, references: Iterable[Reference]) -> List:
        """
        回傳要掛到工作者身上的主檔列表
        1. ById：ID 必須全部存在，否則拋出 InvalidReferenceError
        2. ByName：已存在的 (不分大小寫) 直接沿用，不存在的建立新主檔 (flush 不 commit)
           名稱超過 MAX_NAME_LENGTH 時拋出 ValidationError
        """
        repo = MasterDataRepository(self.db, kind)
        ids, names = collapse_references(references)

        resolved: Dict[str, object] = {}

        if ids:
            found = await repo.list_by_ids(ids)
            found_ids = {record.id for record in found}
            missing = [record_id for record_id in ids if record_id not in found_ids]
            if missing:
                raise InvalidReferenceError(kind.value, missing)
            for record in found:
                resolved[record.id] = record

        if names:
            too_long = [name for name in names if len(name) > MAX_NAME_LENGTH]
            if too_long:
                raise ValidationError(
                    kind.value, too_long, f"Name must be at most {MAX_NAME_LENGTH} characters"
                )

            # 以資料庫 lower() 的結果判斷是否已存在 (與唯一索引一致)
            folded = await repo.fold_names(names)
            existing = {key: record for record, key in await repo.list_by_names(folded.values())}
            new_records = []
            for name in names:
                key = folded[name]
                if key in existing:
                    continue
                record = repo.model(name=name)
                existing[key] = record
                new_records.append(record)
            await repo.add_pending(new_records)
            for record in existing.values():
                resolved[record.id] = record

        logger.info(f"Resolved {len(resolved)} {kind.value} record(s) from {len(ids)} id(s) / {len(names)} name(s)")
        return list(resolved.values())
