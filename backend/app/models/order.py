"""
采购订单模型

订单状态只有两种：
- 未履约：fulfilled_at 为空
- 已履约：fulfilled_at 有值，且不再变化
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, CheckConstraint
from app.db.base import Base


class Order(Base):
    """采购订单"""
    __tablename__ = "Order"
    __table_args__ = (
        CheckConstraint("Amount > 0", name="ck_order_amount_positive"),
    )

    id = Column("IdOrder", Integer, primary_key=True)
    product_id = Column("IdProduct", Integer, ForeignKey("Product.IdProduct"), nullable=False, index=True)
    amount = Column("Amount", Integer, nullable=False, comment="订购数量")
    created_at = Column("CreatedAt", DateTime, nullable=False, comment="下单时间")
    fulfilled_at = Column("FulfilledAt", DateTime, nullable=True, comment="履约时间")

    def __repr__(self):
        return f"<Order {self.id}: product={self.product_id} x{self.amount}>"
