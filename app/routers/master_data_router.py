# app/routers/master_data_router.py
# 技能 (/api/v1/skills) 與興趣 (/api/v1/hobbies) 的主檔 API，兩者路由完全相同
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.database import get_db
from app.repositories.master_data_repo import MasterKind
from app.services.master_data_service import MasterDataService
from app.schemas.common_schema import PagedResultOut
from app.schemas.master_data_schema import MasterRecordIn, MasterRecordOut


def build_master_router(kind: MasterKind, prefix: str, tag: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("/", response_model=PagedResultOut[MasterRecordOut])
    async def list_records(
        db: AsyncSession = Depends(get_db),
        term: Optional[str] = Query(None, description="名稱模糊比對 (不分大小寫)"),
        page: int = Query(1),
        page_size: int = Query(10, alias="pageSize"),
    ):
        """依名稱排序的分頁列表"""
        service = MasterDataService(db, kind)
        return await service.query_master(page=page, page_size=page_size, term=term)

    @router.get("/{record_id}", response_model=MasterRecordOut)
    async def get_record(record_id: str, db: AsyncSession = Depends(get_db)):
        service = MasterDataService(db, kind)
        return await service.get_master(record_id)

    @router.post("/", response_model=MasterRecordOut, status_code=status.HTTP_201_CREATED)
    async def create_record(data: MasterRecordIn, db: AsyncSession = Depends(get_db)):
        """建立主檔，名稱不分大小寫重複時回傳 409"""
        service = MasterDataService(db, kind)
        return await service.create_master(data.name)

    @router.put("/{record_id}", response_model=MasterRecordOut)
    async def rename_record(record_id: str, data: MasterRecordIn, db: AsyncSession = Depends(get_db)):
        service = MasterDataService(db, kind)
        return await service.rename_master(record_id, data.name)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_record(record_id: str, db: AsyncSession = Depends(get_db)):
        """刪除主檔，所有工作者身上的對應關聯一併移除"""
        service = MasterDataService(db, kind)
        await service.delete_master(record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


skillset_router = build_master_router(MasterKind.SKILLSET, "/api/v1/skills", "Skills")
hobby_router = build_master_router(MasterKind.HOBBY, "/api/v1/hobbies", "Hobbies")
