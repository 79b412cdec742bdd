"""API 路由聚合"""
from fastapi import APIRouter

from app.api.endpoints import warehouse

api_router = APIRouter()

api_router.include_router(warehouse.router, prefix="/warehouse", tags=["仓库履约"])
