"""
服务端履约例程 AddProductToWarehouse

SQLite 没有存储过程，这里用「视图 + INSTEAD OF INSERT 触发器」实现：
向视图插入一行即调用一次例程，校验与写入都在同一条语句内原子完成。

违反约束时用 RAISE(ABORT, ...) 抛出引擎错误，消息文本是对外契约：
- IdProduct does not exist
- IdWarehouse does not exist
- no order to fullfill
"""

import logging
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

logger = logging.getLogger(__name__)

PROCEDURE_NAME = "AddProductToWarehouse"

PRODUCT_MISSING_MESSAGE = "IdProduct does not exist"
WAREHOUSE_MISSING_MESSAGE = "IdWarehouse does not exist"
NO_ORDER_MESSAGE = "no order to fullfill"

# 与 SQLAlchemy 的 DateTime 存储格式保持一致（微秒 6 位）
_NOW = "strftime('%Y-%m-%d %H:%M:%f', 'now') || '000'"

# 可履约订单：商品和数量一致、创建时间早于请求时间、尚无履约明细
# 多条匹配时取最早创建的，其次取编号最小的
_FULFILLABLE_ORDER = """
    SELECT o.IdOrder FROM "Order" o
    WHERE o.IdProduct = NEW.IdProduct
      AND o.Amount = NEW.Amount
      AND o.CreatedAt < NEW.CreatedAt
      AND NOT EXISTS (SELECT 1 FROM Product_Warehouse pw WHERE pw.IdOrder = o.IdOrder)
    ORDER BY o.CreatedAt, o.IdOrder
    LIMIT 1
"""

CREATE_VIEW_SQL = f"""
CREATE VIEW IF NOT EXISTS {PROCEDURE_NAME} AS
SELECT
    CAST(NULL AS INTEGER) AS IdProduct,
    CAST(NULL AS INTEGER) AS IdWarehouse,
    CAST(NULL AS INTEGER) AS Amount,
    CAST(NULL AS TEXT) AS CreatedAt
WHERE 0
"""

CREATE_TRIGGER_SQL = f"""
CREATE TRIGGER IF NOT EXISTS {PROCEDURE_NAME}_call
INSTEAD OF INSERT ON {PROCEDURE_NAME}
BEGIN
    SELECT RAISE(ABORT, '{PRODUCT_MISSING_MESSAGE}')
    WHERE NOT EXISTS (SELECT 1 FROM Product WHERE IdProduct = NEW.IdProduct);

    SELECT RAISE(ABORT, '{WAREHOUSE_MISSING_MESSAGE}')
    WHERE NOT EXISTS (SELECT 1 FROM Warehouse WHERE IdWarehouse = NEW.IdWarehouse);

    SELECT RAISE(ABORT, '{NO_ORDER_MESSAGE}')
    WHERE NOT EXISTS ({_FULFILLABLE_ORDER});

    UPDATE "Order" SET FulfilledAt = {_NOW}
    WHERE IdOrder = ({_FULFILLABLE_ORDER});

    INSERT INTO Product_Warehouse (IdWarehouse, IdProduct, IdOrder, Amount, Price, CreatedAt)
    SELECT NEW.IdWarehouse, NEW.IdProduct, o.IdOrder, NEW.Amount, ROUND(p.Price * NEW.Amount, 2), {_NOW}
    FROM "Order" o JOIN Product p ON p.IdProduct = o.IdProduct
    WHERE o.IdOrder = ({_FULFILLABLE_ORDER});
END
"""


async def install_procedures(conn: AsyncConnection) -> None:
    """安装履约例程（幂等）"""
    await conn.execute(text(CREATE_VIEW_SQL))
    await conn.execute(text(CREATE_TRIGGER_SQL))
    logger.debug(f"服务端例程 {PROCEDURE_NAME} 已就绪")
