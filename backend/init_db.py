"""创建数据库表和服务端履约例程"""
import asyncio

from app.core.config import settings
from app.db.init_db import ensure_tables_exist
from app.db.session import create_engine_from_settings


async def init_db() -> None:
    engine = create_engine_from_settings(settings)
    try:
        await ensure_tables_exist(engine)
    finally:
        await engine.dispose()
    print(f"✓ 数据库初始化完成: {settings.DATABASE_URI}")


if __name__ == "__main__":
    asyncio.run(init_db())
