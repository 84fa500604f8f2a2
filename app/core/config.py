# app/core/config.py
# 應用程式設定 (資料庫連線字串、分頁上限、CORS 等)
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # 資料庫設定 (預設使用本機 SQLite，正式環境可改為 mysql+aiomysql://...)
    DATABASE_URL: str = "sqlite+aiosqlite:///./freelancers.db"
    # 是否在 console 印出 SQL 語句
    SQL_ECHO: bool = False

    # 分頁設定
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # CORS 允許來源
    CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    # 環境變數檔案
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# 建立設定實例
settings = Settings()
