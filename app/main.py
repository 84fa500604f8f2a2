import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.database import init_models
from app.core.exceptions import register_exception_handlers
from app.routers import freelancer_router
from app.routers.master_data_router import skillset_router, hobby_router

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from app.models import freelancer
from app.models import skillset
from app.models import hobby


# 設定基礎日誌
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__) # 建立一個 logger 實例

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 啟動時建立尚未存在的資料表
    await init_models()
    logger.info("Database tables are ready")
    yield

app = FastAPI(
    title="Freelancer Directory API",
    description="工作者名錄：CRUD、封存 / 取消封存、username / email 模糊搜尋、技能與興趣篩選",
    lifespan=lifespan,
)

# --- 設定 CORS (跨來源資源共用) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"], # 允許所有 HTTP 方法
    allow_headers=["*"], # 允許所有 HTTP 標頭
)

# --- 領域錯誤 -> HTTP 狀態碼 ---
register_exception_handlers(app)

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "Freelancer directory is running!"}

# --- 載入 API 路由 ---
app.include_router(freelancer_router.router)
app.include_router(skillset_router)
app.include_router(hobby_router)
