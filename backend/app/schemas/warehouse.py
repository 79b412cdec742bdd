"""仓库履约Schema"""
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator

# 数据库整数列的上限（64 位有符号）
MAX_SQL_INTEGER = 2 ** 63 - 1


class ProductWarehouseCreate(BaseModel):
    """履约请求：把某订单的商品登记入库"""
    product_id: int = Field(..., alias="idProduct", ge=1, le=MAX_SQL_INTEGER, description="商品ID")
    warehouse_id: int = Field(..., alias="idWarehouse", ge=1, le=MAX_SQL_INTEGER, description="仓库ID")
    amount: int = Field(..., alias="amount", gt=0, le=MAX_SQL_INTEGER, description="数量")
    created_at: datetime = Field(..., alias="createdAt", description="请求参考时间，订单必须早于此时间创建")

    @field_validator("created_at")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        """带时区的时间统一转成 UTC 后去掉时区，和库里的存储格式一致"""
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    class Config:
        populate_by_name = True


class ProductWarehouseResponse(BaseModel):
    """履约成功响应"""
    message: str = "Success"
    id_product_warehouse: int = Field(..., alias="idProductWarehouse", description="履约明细ID")

    class Config:
        populate_by_name = True
