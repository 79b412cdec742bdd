from typing import List, Union
import logging

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    PROJECT_NAME: str = "仓库订单履约服务"
    API_PREFIX: str = "/api"

    # 数据库连接串（唯一的存储配置项）
    # 重要：生产环境通过 .env 文件或环境变量 DATABASE_URI 设置
    DATABASE_URI: str = Field(
        default="sqlite+aiosqlite:///./warehouse.db",
        description="数据库连接串"
    )
    SQL_DEBUG: bool = False
    # 写锁等待时间（秒），并发写入时后到的事务最多等待这么久
    DB_BUSY_TIMEOUT: float = 5.0

    # 日志配置
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    # CORS配置
    BACKEND_CORS_ORIGINS: List[Union[str, AnyHttpUrl]] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @field_validator("DATABASE_URI")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """普通 sqlite:/// 地址自动切换为 aiosqlite 驱动"""
        if v.startswith("sqlite:///"):
            return v.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return v

    class Config:
        case_sensitive = True
        env_file = ".env"
        extra = "ignore"


settings = Settings()
logger.debug(f"加载配置: DATABASE_URI={settings.DATABASE_URI}, API_PREFIX={settings.API_PREFIX}")
