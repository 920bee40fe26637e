# backend/core/config.py
import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# 讀取 backend/.env (若存在)，再交給 Settings 解析
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env")
load_dotenv(dotenv_path)


class Settings(BaseSettings):
    """
    系統設定 (啟動時建立一次，之後唯讀)
    port: 服務埠號 (環境變數 PORT)
    host: 綁定位址 (環境變數 HOST)
    log_level: 日誌等級 (環境變數 LOG_LEVEL)
    """
    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    port: int = 5000
    host: str = "0.0.0.0"
    log_level: str = "INFO"
    app_title: str = "StockXpert API"


def load_settings() -> Settings:
    return Settings()
