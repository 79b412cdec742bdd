"""
履约事务

在同一个事务内：
1. 标记订单已履约
2. 读取商品单价，计算金额 = 单价 × 数量
3. 写入履约明细，取得生成的ID

任何一步失败都整体回滚，不会出现订单已标记但没有明细的情况。
"""

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StorageFailure
from app.core.logging_config import get_logger
from app.schemas.warehouse import ProductWarehouseCreate
from app.services.fulfillment import store

logger = get_logger(__name__)


async def fulfill_order(
    db: AsyncSession,
    request: ProductWarehouseCreate,
    order_id: int) -> int:
    """执行履约事务，返回履约明细ID"""
    now = datetime.utcnow()
    try:
        await store.mark_order_fulfilled(db, order_id, now)

        unit_price = await store.get_product_price(db, request.product_id)
        if unit_price is None:
            # 校验之后商品被删除，属于意外情况而非业务错误
            raise StorageFailure(f"Product {request.product_id} price is unavailable")

        line_id = await store.insert_fulfillment_line(
            db,
            warehouse_id=request.warehouse_id,
            product_id=request.product_id,
            order_id=order_id,
            amount=request.amount,
            price=unit_price * request.amount,
            created_at=now,
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"履约事务失败，已回滚: order={order_id} error={e}")
        raise StorageFailure(str(e.orig) if getattr(e, "orig", None) else str(e), e) from e
    except StorageFailure:
        await db.rollback()
        logger.error(f"履约事务失败，已回滚: order={order_id} 商品单价缺失")
        raise

    logger.info(f"✅ 订单 {order_id} 已履约，明细ID: {line_id}")
    return line_id
