from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from app.core.config import settings

# 建立非同步引擎
engine = create_async_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True, # 每次從連線池取連線前，先 PING 一次，確保連線有效
    echo=settings.SQL_ECHO,
)

def enable_sqlite_foreign_keys(async_engine) -> None:
    """
    SQLite 預設不檢查外鍵，必須在每條連線上開啟，ON DELETE CASCADE 才會生效
    """
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

enable_sqlite_foreign_keys(engine)

# 建立非同步 Session
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# 建立 ORM Model 基底類別
Base = declarative_base()

# (重要) 取得 DB Session 的 Dependency
async def get_db() -> AsyncSession:
    """FastAPI Dependency: 取得非同步資料庫 session (每個 request 一個)"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

async def init_models() -> None:
    """
    啟動時建立尚未存在的資料表
    (呼叫前必須先匯入所有 Model，讓它們註冊到 Base.metadata)
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
