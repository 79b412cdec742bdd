import logging
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.base import Base
from app.db.procedures import install_procedures

# 导入所有模型，确保表能被创建
from app.models import Product, Warehouse, Order, ProductWarehouse  # noqa: F401

logger = logging.getLogger(__name__)


async def ensure_tables_exist(engine: AsyncEngine) -> None:
    """
    确保数据库表和服务端例程存在（应用启动时调用）
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await install_procedures(conn)
    logger.info("📊 数据库表已就绪")
