from sqlalchemy import Column, Integer, String
from app.db.base import Base


class Warehouse(Base):
    """仓库"""
    __tablename__ = "Warehouse"

    id = Column("IdWarehouse", Integer, primary_key=True)
    name = Column("Name", String(200), comment="仓库名称")
    address = Column("Address", String(200), comment="地址")

    def __repr__(self):
        return f"<Warehouse {self.id}: {self.name}>"
