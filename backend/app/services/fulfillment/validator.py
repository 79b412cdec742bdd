"""
履约前置校验

依次检查：商品存在 → 仓库存在 → 有匹配订单 → 订单未履约，
任一失败立即抛出对应的业务异常。

注意：每一步都是独立的读操作，校验和后续事务之间不持有锁。
两个并发请求可能同时通过校验，此时由 Product_Warehouse.IdOrder
的唯一约束兜底，后提交的事务失败并回滚。
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    InvalidReference, NoMatchingOrder, AlreadyFulfilled, StorageFailure
)
from app.core.logging_config import get_logger
from app.schemas.warehouse import ProductWarehouseCreate
from app.services.fulfillment import store

logger = get_logger(__name__)


async def _check_request(db: AsyncSession, request: ProductWarehouseCreate) -> int:
    if not await store.product_exists(db, request.product_id):
        logger.info(f"履约拒绝: 商品 {request.product_id} 不存在")
        raise InvalidReference("product")

    if not await store.warehouse_exists(db, request.warehouse_id):
        logger.info(f"履约拒绝: 仓库 {request.warehouse_id} 不存在")
        raise InvalidReference("warehouse")

    order_id = await store.find_matching_order(
        db, request.product_id, request.amount, request.created_at
    )
    if order_id is None:
        logger.info(
            f"履约拒绝: 没有匹配的订单 product={request.product_id} "
            f"amount={request.amount} before={request.created_at}"
        )
        raise NoMatchingOrder()

    if await store.is_fulfilled(db, order_id):
        logger.info(f"履约拒绝: 订单 {order_id} 已履约")
        raise AlreadyFulfilled(order_id)

    return order_id


async def validate_request(db: AsyncSession, request: ProductWarehouseCreate) -> int:
    """校验履约请求，返回匹配到的订单ID"""
    try:
        return await _check_request(db, request)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"履约校验读取失败，已回滚: {e}")
        orig = getattr(e, "orig", None)
        raise StorageFailure(str(orig) if orig is not None else str(e), e) from e
