"""依赖注入 - 单机版（无认证）"""
from typing import AsyncGenerator
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    获取数据库会话依赖

    会话工厂在应用启动时创建并挂在 app.state 上
    """
    async with request.app.state.session_factory() as session:
        yield session
