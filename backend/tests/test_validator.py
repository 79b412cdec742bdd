"""履约前置校验测试"""

from datetime import datetime
from decimal import Decimal

import pytest

from app.core.exceptions import InvalidReference, NoMatchingOrder, AlreadyFulfilled
from app.models import ProductWarehouse
from app.services.fulfillment.validator import validate_request
from tests.conftest import make_request


async def test_valid_request_returns_order_id(db):
    assert await validate_request(db, make_request()) == 7


async def test_unknown_product(db):
    with pytest.raises(InvalidReference) as exc_info:
        await validate_request(db, make_request(product_id=999))
    assert exc_info.value.entity == "product"
    assert exc_info.value.message == "Product does not exist"


async def test_unknown_warehouse(db):
    with pytest.raises(InvalidReference) as exc_info:
        await validate_request(db, make_request(warehouse_id=999))
    assert exc_info.value.entity == "warehouse"
    assert exc_info.value.message == "Warehouse does not exist"


async def test_product_checked_before_warehouse(db):
    with pytest.raises(InvalidReference) as exc_info:
        await validate_request(db, make_request(product_id=999, warehouse_id=999))
    assert exc_info.value.entity == "product"


async def test_warehouse_checked_before_order(db):
    with pytest.raises(InvalidReference) as exc_info:
        await validate_request(db, make_request(warehouse_id=999, amount=50))
    assert exc_info.value.entity == "warehouse"


async def test_no_matching_order(db):
    with pytest.raises(NoMatchingOrder):
        await validate_request(db, make_request(amount=50))


async def test_order_created_after_request(db):
    with pytest.raises(NoMatchingOrder):
        await validate_request(db, make_request(created_at=datetime(2023, 12, 31)))


async def test_already_fulfilled(db):
    db.add(ProductWarehouse(
        warehouse_id=2, product_id=1, order_id=7, amount=3,
        price=Decimal("29.97"), created_at=datetime(2024, 5, 1),
    ))
    await db.commit()

    with pytest.raises(AlreadyFulfilled) as exc_info:
        await validate_request(db, make_request())
    assert exc_info.value.order_id == 7
