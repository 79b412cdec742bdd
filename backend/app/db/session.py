from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    根据配置创建异步引擎

    连接串由调用方显式传入，引擎的生命周期跟随应用启动/关闭
    """
    engine = create_async_engine(
        settings.DATABASE_URI,
        echo=settings.SQL_DEBUG,
        future=True,
        connect_args={"timeout": settings.DB_BUSY_TIMEOUT},
    )

    # SQLite 默认不检查外键，每个新连接都要打开
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    """创建异步会话工厂"""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
