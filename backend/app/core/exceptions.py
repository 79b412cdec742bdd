"""
履约业务异常

- DomainError: 客户端可归因的前置条件失败（接口返回 400）
- StorageFailure: 存储层的意外错误（接口返回 500），抛出前事务已回滚
"""

from typing import Optional


class FulfillmentError(Exception):
    """履约流程异常基类"""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainError(FulfillmentError):
    """业务校验失败"""
    pass


class InvalidReference(DomainError):
    """引用的商品或仓库不存在"""

    MESSAGES = {
        "product": "Product does not exist",
        "warehouse": "Warehouse does not exist",
    }

    def __init__(self, entity: str) -> None:
        if entity not in self.MESSAGES:
            raise ValueError(f"未知的实体类型: {entity}")
        self.entity = entity
        super().__init__(self.MESSAGES[entity])


class NoMatchingOrder(DomainError):
    """没有可履约的订单（商品、数量匹配且创建时间早于请求时间）"""

    def __init__(self) -> None:
        super().__init__("Valid order does not exist")


class AlreadyFulfilled(DomainError):
    """订单已经履约过"""

    def __init__(self, order_id: Optional[int] = None) -> None:
        self.order_id = order_id
        super().__init__("Order has been already fulfilled")


class StorageFailure(FulfillmentError):
    """存储层错误：连接、约束冲突、事务失败等"""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)
