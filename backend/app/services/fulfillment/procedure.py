"""
存储过程履约

整个「校验 + 履约」交给服务端例程 AddProductToWarehouse 在一次调用内原子完成，
不存在内联流程中校验与写入之间的竞态窗口。
"""

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    FulfillmentError, InvalidReference, NoMatchingOrder, StorageFailure
)
from app.core.logging_config import get_logger
from app.db.procedures import (
    PRODUCT_MISSING_MESSAGE, WAREHOUSE_MISSING_MESSAGE, NO_ORDER_MESSAGE
)
from app.schemas.warehouse import ProductWarehouseCreate
from app.services.fulfillment import store

logger = get_logger(__name__)


def translate_routine_error(error: BaseException) -> FulfillmentError:
    """
    把例程抛出的引擎错误翻译成业务异常

    例程只能通过错误消息区分违规类型，所以这里按已知子串匹配；
    无法识别的错误一律视为存储错误。
    """
    orig = getattr(error, "orig", None)
    message = str(orig) if orig is not None else str(error)

    if PRODUCT_MISSING_MESSAGE in message:
        return InvalidReference("product")
    if NO_ORDER_MESSAGE in message:
        return NoMatchingOrder()
    if WAREHOUSE_MISSING_MESSAGE in message:
        return InvalidReference("warehouse")
    return StorageFailure(f"Database error: {message}", error)


async def fulfill_with_procedure(db: AsyncSession, request: ProductWarehouseCreate) -> int:
    """调用服务端例程完成履约，返回履约明细ID"""
    try:
        line_id = await store.call_add_product_to_warehouse(
            db,
            request.product_id,
            request.warehouse_id,
            request.amount,
            request.created_at,
        )
        if line_id is None:
            raise StorageFailure("Database error: Failed to get new product warehouse ID")
        await db.commit()
    except DBAPIError as e:
        await db.rollback()
        translated = translate_routine_error(e)
        if isinstance(translated, StorageFailure):
            logger.error(f"履约例程执行失败，已回滚: {e}")
        else:
            logger.info(f"履约拒绝（例程）: {translated.message}")
        raise translated from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"履约例程执行失败，已回滚: {e}")
        raise StorageFailure(f"Database error: {e}", e) from e
    except StorageFailure:
        await db.rollback()
        raise

    logger.info(f"✅ 例程履约成功，明细ID: {line_id}")
    return line_id
