"""
履约流程的两种实现

- InlineFulfillmentWorkflow: 应用内逐步校验，再开事务写入
- ProcedureFulfillmentWorkflow: 一次调用服务端例程完成

两者对外行为一致：成功返回履约明细ID，失败抛出 app.core.exceptions 中的异常。
区别在于并发保证：内联流程的校验和写入之间存在竞态窗口，
只靠 Product_Warehouse.IdOrder 唯一约束兜底（失败表现为 StorageFailure）；
例程在一次原子执行内完成校验和写入，没有这个窗口。
"""

from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.warehouse import ProductWarehouseCreate
from app.services.fulfillment.executor import fulfill_order
from app.services.fulfillment.procedure import fulfill_with_procedure
from app.services.fulfillment.validator import validate_request


class FulfillmentWorkflow(ABC):
    """履约流程接口"""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @abstractmethod
    async def fulfill(self, request: ProductWarehouseCreate) -> int:
        """履约一个订单，返回生成的履约明细ID"""


class InlineFulfillmentWorkflow(FulfillmentWorkflow):

    async def fulfill(self, request: ProductWarehouseCreate) -> int:
        order_id = await validate_request(self.db, request)
        return await fulfill_order(self.db, request, order_id)


class ProcedureFulfillmentWorkflow(FulfillmentWorkflow):

    async def fulfill(self, request: ProductWarehouseCreate) -> int:
        return await fulfill_with_procedure(self.db, request)
