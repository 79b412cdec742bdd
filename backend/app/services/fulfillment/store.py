"""
履约存储访问

对 Product / Warehouse / Order / Product_Warehouse 四张表的读写，
全部使用参数化查询。函数只负责一次存储操作，不做提交或回滚。
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update, exists, text, bindparam, DateTime
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.procedures import PROCEDURE_NAME
from app.models import Product, Warehouse, Order, ProductWarehouse


async def product_exists(db: AsyncSession, product_id: int) -> bool:
    result = await db.execute(select(exists().where(Product.id == product_id)))
    return bool(result.scalar())


async def warehouse_exists(db: AsyncSession, warehouse_id: int) -> bool:
    result = await db.execute(select(exists().where(Warehouse.id == warehouse_id)))
    return bool(result.scalar())


async def find_matching_order(
    db: AsyncSession,
    product_id: int,
    amount: int,
    before: datetime) -> Optional[int]:
    """
    查找匹配的订单

    匹配条件：商品、数量一致，且创建时间严格早于 before。
    多条匹配时依次按以下规则取第一条：
    1. 尚未履约的优先
    2. 创建时间最早
    3. 订单编号最小
    """
    fulfilled = exists().where(ProductWarehouse.order_id == Order.id).correlate(Order)
    result = await db.execute(
        select(Order.id)
        .where(
            Order.product_id == product_id,
            Order.amount == amount,
            Order.created_at < before,
        )
        .order_by(fulfilled.asc(), Order.created_at.asc(), Order.id.asc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def is_fulfilled(db: AsyncSession, order_id: int) -> bool:
    """订单是否已有履约明细"""
    result = await db.execute(
        select(exists().where(ProductWarehouse.order_id == order_id))
    )
    return bool(result.scalar())


async def get_product_price(db: AsyncSession, product_id: int) -> Optional[Decimal]:
    result = await db.execute(select(Product.price).where(Product.id == product_id))
    return result.scalar_one_or_none()


async def mark_order_fulfilled(db: AsyncSession, order_id: int, fulfilled_at: datetime) -> int:
    """标记订单已履约，返回受影响的行数"""
    result = await db.execute(
        update(Order)
        .where(Order.id == order_id)
        .values(fulfilled_at=fulfilled_at)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def insert_fulfillment_line(
    db: AsyncSession,
    *,
    warehouse_id: int,
    product_id: int,
    order_id: int,
    amount: int,
    price: Decimal,
    created_at: datetime) -> int:
    """写入履约明细，返回生成的明细ID"""
    line = ProductWarehouse(
        warehouse_id=warehouse_id,
        product_id=product_id,
        order_id=order_id,
        amount=amount,
        price=price,
        created_at=created_at,
    )
    db.add(line)
    await db.flush()
    return line.id


_CALL_PROCEDURE = text(
    f"INSERT INTO {PROCEDURE_NAME} (IdProduct, IdWarehouse, Amount, CreatedAt) "
    "VALUES (:id_product, :id_warehouse, :amount, :created_at)"
).bindparams(bindparam("created_at", type_=DateTime()))

# 同一写事务内，最大的明细ID就是例程刚写入的那条
_LAST_LINE_ID = text("SELECT MAX(IdProductWarehouse) FROM Product_Warehouse")


async def call_add_product_to_warehouse(
    db: AsyncSession,
    product_id: int,
    warehouse_id: int,
    amount: int,
    created_at: datetime) -> Optional[int]:
    """
    调用服务端例程 AddProductToWarehouse，返回生成的明细ID

    违反约束时数据库抛出引擎错误（sqlalchemy.exc.DBAPIError），由调用方翻译
    """
    await db.execute(
        _CALL_PROCEDURE,
        {
            "id_product": product_id,
            "id_warehouse": warehouse_id,
            "amount": amount,
            "created_at": created_at,
        },
    )
    result = await db.execute(_LAST_LINE_ID)
    return result.scalar()
