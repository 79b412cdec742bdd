"""
两种履约流程共用的行为测试

同一组用例分别跑在内联流程和例程流程上，保证两者行为一致
"""

import asyncio
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import text

from app.core.exceptions import (
    AlreadyFulfilled, InvalidReference, NoMatchingOrder, StorageFailure
)
from app.models import ProductWarehouse
from app.services.fulfillment import (
    FulfillmentWorkflow,
    InlineFulfillmentWorkflow,
    ProcedureFulfillmentWorkflow,
)
from tests.conftest import make_request, add_order, get_order, get_lines

pytestmark = pytest.mark.parametrize(
    "workflow_cls",
    [InlineFulfillmentWorkflow, ProcedureFulfillmentWorkflow],
    ids=["inline", "procedure"],
)

# 重复履约时的拒绝类型：例程把「匹配订单均已履约」视为无可履约订单
REPEAT_ERRORS = {
    InlineFulfillmentWorkflow: AlreadyFulfilled,
    ProcedureFulfillmentWorkflow: NoMatchingOrder,
}


async def test_is_a_fulfillment_workflow(workflow_cls, db):
    assert isinstance(workflow_cls(db), FulfillmentWorkflow)


async def test_example_fulfillment(workflow_cls, session_factory, db):
    before = datetime.utcnow().replace(microsecond=0)
    line_id = await workflow_cls(db).fulfill(make_request())

    order = await get_order(session_factory, 7)
    assert order.fulfilled_at is not None
    assert order.fulfilled_at >= before

    async with session_factory() as session:
        line = await session.get(ProductWarehouse, line_id)
    assert line.order_id == 7
    assert line.product_id == 1
    assert line.warehouse_id == 2
    assert line.amount == 3
    assert line.price == Decimal("29.97")


async def test_unknown_product(workflow_cls, db):
    with pytest.raises(InvalidReference) as exc_info:
        await workflow_cls(db).fulfill(make_request(product_id=999))
    assert exc_info.value.entity == "product"


async def test_unknown_warehouse(workflow_cls, db):
    with pytest.raises(InvalidReference) as exc_info:
        await workflow_cls(db).fulfill(make_request(warehouse_id=999))
    assert exc_info.value.entity == "warehouse"


async def test_amount_mismatch(workflow_cls, db):
    with pytest.raises(NoMatchingOrder):
        await workflow_cls(db).fulfill(make_request(amount=2))


async def test_order_at_same_instant_does_not_match(workflow_cls, session_factory, db):
    with pytest.raises(NoMatchingOrder):
        await workflow_cls(db).fulfill(make_request(created_at=datetime(2024, 1, 1)))
    assert await get_lines(session_factory, 7) == []


async def test_second_fulfillment_rejected(workflow_cls, session_factory, db):
    workflow = workflow_cls(db)
    await workflow.fulfill(make_request())
    fulfilled_at = (await get_order(session_factory, 7)).fulfilled_at

    with pytest.raises(REPEAT_ERRORS[workflow_cls]):
        await workflow.fulfill(make_request())

    assert len(await get_lines(session_factory, 7)) == 1
    assert (await get_order(session_factory, 7)).fulfilled_at == fulfilled_at


async def test_matching_orders_fulfilled_earliest_first(workflow_cls, session_factory, db):
    await add_order(session_factory, 30, 1, 3, datetime(2024, 2, 1))
    await add_order(session_factory, 31, 1, 3, datetime(2023, 11, 1))
    workflow = workflow_cls(db)

    fulfilled = []
    for _ in range(3):
        line_id = await workflow.fulfill(make_request())
        fulfilled.append((await db.get(ProductWarehouse, line_id)).order_id)
    assert fulfilled == [31, 7, 30]

    with pytest.raises(REPEAT_ERRORS[workflow_cls]):
        await workflow.fulfill(make_request())


@pytest.mark.parametrize("amount", [1, 7, 250])
async def test_price_invariant(workflow_cls, session_factory, db, amount):
    await add_order(session_factory, 40, 2, amount, datetime(2024, 4, 1))
    line_id = await workflow_cls(db).fulfill(make_request(product_id=2, amount=amount))

    async with session_factory() as session:
        line = await session.get(ProductWarehouse, line_id)
    assert line.price == (Decimal("12.50") * amount).quantize(Decimal("0.01"))


async def test_concurrent_requests_fulfill_once(workflow_cls, session_factory):
    async def attempt():
        async with session_factory() as session:
            return await workflow_cls(session).fulfill(make_request())

    results = await asyncio.gather(attempt(), attempt(), return_exceptions=True)

    successes = [r for r in results if isinstance(r, int)]
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(successes) == 1
    assert len(failures) == 1
    assert isinstance(failures[0], (AlreadyFulfilled, NoMatchingOrder, StorageFailure))

    lines = await get_lines(session_factory, 7)
    assert [line.id for line in lines] == successes
    assert (await get_order(session_factory, 7)).fulfilled_at is not None


async def test_broken_store_reported_as_storage_failure(workflow_cls, engine, session_factory, db):
    async with engine.begin() as conn:
        await conn.execute(text("DROP TABLE Warehouse"))

    with pytest.raises(StorageFailure) as exc_info:
        await workflow_cls(db).fulfill(make_request())
    assert exc_info.value.cause is not None

    assert await get_lines(session_factory, 7) == []
    assert (await get_order(session_factory, 7)).fulfilled_at is None
