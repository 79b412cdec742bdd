"""
商品模型
只保留履约需要的单价，名称和描述仅作展示
"""

from decimal import Decimal
from sqlalchemy import Column, Integer, String, DECIMAL, CheckConstraint
from app.db.base import Base


class Product(Base):
    """商品"""
    __tablename__ = "Product"
    __table_args__ = (
        CheckConstraint("Price >= 0", name="ck_product_price_non_negative"),
    )

    id = Column("IdProduct", Integer, primary_key=True)
    name = Column("Name", String(200), comment="品名")
    description = Column("Description", String(200), comment="描述")

    # 单价，履约明细的金额 = 单价 × 数量
    price = Column("Price", DECIMAL(25, 2), nullable=False, default=Decimal("0.00"), comment="单价")

    def __repr__(self):
        return f"<Product {self.id}: {self.name} @ {self.price}>"
