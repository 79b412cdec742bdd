"""
测试公共夹具

每个测试使用 tmp_path 下独立的 SQLite 文件库（并发测试需要多个真实连接）。
演示数据：
- 商品 1（单价 9.99）、商品 2（单价 12.50）
- 仓库 2
- 订单 7：商品 1 × 3，2024-01-01 创建
- 订单 8：商品 2 × 4，2024-03-01 创建
"""

import os

os.environ.setdefault("LOG_TO_FILE", "false")

from datetime import datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import select

from app.core.config import Settings
from app.db.init_db import ensure_tables_exist
from app.db.session import create_engine_from_settings, create_session_factory
from app.models import Product, Warehouse, Order, ProductWarehouse
from app.schemas.warehouse import ProductWarehouseCreate

REQUEST_TIME = datetime(2024, 6, 1)


def make_request(**overrides) -> ProductWarehouseCreate:
    data = {
        "product_id": 1,
        "warehouse_id": 2,
        "amount": 3,
        "created_at": REQUEST_TIME,
    }
    data.update(overrides)
    return ProductWarehouseCreate(**data)


async def seed_data(session_factory) -> None:
    async with session_factory() as session:
        session.add_all([
            Product(id=1, name="Widget", price=Decimal("9.99")),
            Product(id=2, name="Gadget", price=Decimal("12.50")),
            Warehouse(id=2, name="North", address="Lesna 12"),
        ])
        await session.flush()
        session.add_all([
            Order(id=7, product_id=1, amount=3, created_at=datetime(2024, 1, 1)),
            Order(id=8, product_id=2, amount=4, created_at=datetime(2024, 3, 1)),
        ])
        await session.commit()


async def add_order(session_factory, order_id: int, product_id: int, amount: int, created_at: datetime) -> None:
    async with session_factory() as session:
        session.add(Order(id=order_id, product_id=product_id, amount=amount, created_at=created_at))
        await session.commit()


async def get_order(session_factory, order_id: int) -> Order:
    async with session_factory() as session:
        return await session.get(Order, order_id)


async def get_lines(session_factory, order_id: int) -> list:
    async with session_factory() as session:
        result = await session.execute(
            select(ProductWarehouse).where(ProductWarehouse.order_id == order_id)
        )
        return list(result.scalars().all())


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URI=f"sqlite+aiosqlite:///{tmp_path / 'warehouse_test.db'}",
        LOG_TO_FILE=False,
        BACKEND_CORS_ORIGINS=[],
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = create_engine_from_settings(settings)
    await ensure_tables_exist(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    factory = create_session_factory(engine)
    await seed_data(factory)
    return factory


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session
