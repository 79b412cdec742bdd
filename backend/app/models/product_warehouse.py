"""
履约明细模型 - 订单入库的流水记录
每个订单最多对应一条明细（IdOrder 唯一约束），由数据库保证不会重复履约
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, DECIMAL, UniqueConstraint
from app.db.base import Base


class ProductWarehouse(Base):
    """履约明细"""
    __tablename__ = "Product_Warehouse"
    __table_args__ = (
        UniqueConstraint("IdOrder", name="uq_product_warehouse_order"),
    )

    id = Column("IdProductWarehouse", Integer, primary_key=True)
    warehouse_id = Column("IdWarehouse", Integer, ForeignKey("Warehouse.IdWarehouse"), nullable=False, index=True)
    product_id = Column("IdProduct", Integer, ForeignKey("Product.IdProduct"), nullable=False, index=True)
    order_id = Column("IdOrder", Integer, ForeignKey("Order.IdOrder"), nullable=False)
    amount = Column("Amount", Integer, nullable=False, comment="数量")

    # 金额 = 商品单价 × 数量
    price = Column("Price", DECIMAL(25, 2), nullable=False, comment="金额")
    created_at = Column("CreatedAt", DateTime, nullable=False, comment="入库时间")

    def __repr__(self):
        return f"<ProductWarehouse {self.id}: order={self.order_id} price={self.price}>"
