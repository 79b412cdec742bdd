"""
仓库履约API

- POST /warehouse            应用内校验 + 事务履约
- POST /warehouse/procedure  服务端例程履约

两个接口请求/响应格式完全一致
"""
from typing import Any, Optional
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import get_db
from app.core.exceptions import DomainError
from app.core.logging_config import get_logger
from app.schemas.warehouse import ProductWarehouseCreate, ProductWarehouseResponse
from app.services.fulfillment import (
    FulfillmentWorkflow,
    InlineFulfillmentWorkflow,
    ProcedureFulfillmentWorkflow,
)

logger = get_logger(__name__)

router = APIRouter()

EMPTY_BODY_MESSAGE = "Body must not be empty"


async def run_workflow(
    workflow: FulfillmentWorkflow,
    product_warehouse_in: Optional[ProductWarehouseCreate]) -> Any:
    """执行履约流程并构建响应"""
    if product_warehouse_in is None:
        return JSONResponse(status_code=400, content={"message": EMPTY_BODY_MESSAGE})

    try:
        line_id = await workflow.fulfill(product_warehouse_in)
    except DomainError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    except Exception as e:
        logger.exception(f"履约失败: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return ProductWarehouseResponse(id_product_warehouse=line_id)


@router.post("", response_model=ProductWarehouseResponse, response_model_by_alias=True)
async def add_product_to_warehouse(
    *,
    db: AsyncSession = Depends(get_db),
    product_warehouse_in: Optional[ProductWarehouseCreate] = Body(None)) -> Any:
    """订单商品入库（应用内校验）"""
    return await run_workflow(InlineFulfillmentWorkflow(db), product_warehouse_in)


@router.post("/procedure", response_model=ProductWarehouseResponse, response_model_by_alias=True)
async def add_product_to_warehouse_with_procedure(
    *,
    db: AsyncSession = Depends(get_db),
    product_warehouse_in: Optional[ProductWarehouseCreate] = Body(None)) -> Any:
    """订单商品入库（服务端例程）"""
    return await run_workflow(ProcedureFulfillmentWorkflow(db), product_warehouse_in)
