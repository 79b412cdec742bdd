# models包初始化文件

from app.models.product import Product
from app.models.warehouse import Warehouse
from app.models.order import Order
from app.models.product_warehouse import ProductWarehouse

__all__ = [
    "Product",
    "Warehouse",
    "Order",
    "ProductWarehouse",
]
