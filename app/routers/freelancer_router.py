# app/routers/freelancer_router.py
import logging
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.database import get_db
from app.services.freelancer_service import FreelancerService
from app.schemas.common_schema import PagedResultOut
from app.schemas.freelancer_schema import FreelancerRequest, FreelancerArchiveUpdate, FreelancerOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/freelancers",
    tags=["Freelancers"],
)

@router.get("/", response_model=PagedResultOut[FreelancerOut])
async def list_freelancers(
    db: AsyncSession = Depends(get_db),
    term: Optional[str] = Query(None, description="username / email 模糊比對 (不分大小寫)"),
    include_archived: bool = Query(False, alias="includeArchived"),
    page: int = Query(1, description="從 1 開始的頁碼"),
    page_size: int = Query(10, alias="pageSize", description="每頁筆數 (預設 10，最多 100)"),
    skill: Optional[str] = Query(None, description="技能篩選，多個以逗號分隔"),
    hobby: Optional[str] = Query(None, description="興趣篩選，多個以逗號分隔"),
):
    """
    分頁列出工作者 (預設不含已封存)。

    - 分頁參數超出範圍時會自動校正，不回傳 400。
    - `skill` / `hobby` 只有一個值時為模糊比對，多個值時為「任一完全相符」。
    """
    logger.info(
        f"Router received query params - term: {term}, includeArchived: {include_archived}, "
        f"page: {page}, pageSize: {page_size}, skill: {skill}, hobby: {hobby}"
    )
    service = FreelancerService(db)
    return await service.query_freelancers(
        page=page,
        page_size=page_size,
        include_archived=include_archived,
        term=term,
        skill_filter=skill,
        hobby_filter=hobby,
    )

@router.get("/{freelancer_id}", response_model=FreelancerOut)
async def get_freelancer(freelancer_id: str, db: AsyncSession = Depends(get_db)):
    """
    獲取單一工作者 (含技能、興趣)。
    """
    service = FreelancerService(db)
    # Service 層會自動處理 404 Not Found
    return await service.get_freelancer(freelancer_id)

@router.post("/", response_model=FreelancerOut, status_code=status.HTTP_201_CREATED)
async def create_freelancer(data: FreelancerRequest, db: AsyncSession = Depends(get_db)):
    """
    建立新工作者。

    - 技能 / 興趣可用 `skillsetIds` / `hobbyIds` 指定既有主檔，
      或用 `skillsets` / `hobbies` 傳名稱 (不存在時自動建立)。
    - username 或 email 重複時回傳 409。
    """
    service = FreelancerService(db)
    return await service.create_freelancer(data)

@router.put("/{freelancer_id}", response_model=FreelancerOut)
async def update_freelancer(
    freelancer_id: str,
    data: FreelancerRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    整筆覆蓋工作者資料 (技能 / 興趣關聯也會整批替換)。
    """
    service = FreelancerService(db)
    return await service.update_freelancer(freelancer_id, data)

@router.patch("/{freelancer_id}", response_model=FreelancerOut)
async def patch_freelancer(
    freelancer_id: str,
    data: FreelancerArchiveUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    部分更新 (目前只支援切換封存狀態)：`{"isArchived": true}`
    """
    service = FreelancerService(db)
    return await service.archive_freelancer(freelancer_id, data.is_archived)

@router.delete("/{freelancer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_freelancer(freelancer_id: str, db: AsyncSession = Depends(get_db)):
    """
    刪除工作者及其所有技能 / 興趣關聯。
    """
    service = FreelancerService(db)
    await service.delete_freelancer(freelancer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
