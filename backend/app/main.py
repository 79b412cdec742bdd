from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.api import api_router
from app.core.config import Settings, settings as default_settings
from app.core.logging_config import setup_logging, get_logger
from app.db.init_db import ensure_tables_exist
from app.db.session import create_engine_from_settings, create_session_factory

logger = get_logger(__name__)


def format_validation_errors(exc: RequestValidationError) -> list:
    """把校验错误整理成可读的字符串列表"""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        errors.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "errors": format_validation_errors(exc)},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    创建应用

    连接串等配置通过 settings 显式传入；数据库引擎在启动时创建，关闭时释放
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """应用生命周期管理"""
        logger.info("🚀 应用启动中...")
        engine = create_engine_from_settings(settings)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        await ensure_tables_exist(engine)
        yield
        logger.info("🛑 应用关闭中...")
        await engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="仓库订单履约服务",
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # CORS配置
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    logger.info(f"注册API路由，前缀: {settings.API_PREFIX}")
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        return {"message": settings.PROJECT_NAME}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


setup_logging(default_settings.LOG_LEVEL, default_settings.LOG_DIR, default_settings.LOG_TO_FILE)
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
