"""
FastAPI 应用入口
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import text

from socialfeed.api import api_v1_router
from socialfeed.config import settings
from socialfeed.db import base
from socialfeed.errors import ServiceError
from socialfeed.services.presence_service import PresenceStore
from socialfeed.utils.logger_config import setup_logging


async def check_and_init_database():
    """初始化连接池并确保表存在"""
    if not settings.DATABASE_ENABLED:
        logger.info("📦 Database disabled, skipping initialization")
        return

    try:
        logger.info("🔍 Checking database connection...")
        await base.init_db()

        # 导入所有模型以确保 Base 知道它们
        from socialfeed.db import models  # noqa: F401

        async with base.async_engine.begin() as conn:
            await conn.run_sync(base.Base.metadata.create_all)

        logger.success("✅ Database connection pool initialized")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        logger.warning("⚠️  API endpoints that need the database will respond with errors")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    setup_logging()
    logger.info(f"🚀 Starting {settings.APP_NAME}...")

    await check_and_init_database()

    # 在线状态表随应用创建，随应用销毁
    app.state.presence = PresenceStore(ttl_seconds=settings.PRESENCE_TTL_SECONDS)
    sweeper = asyncio.create_task(
        app.state.presence.run_sweeper(settings.PRESENCE_SWEEP_INTERVAL)
    )

    logger.success("🎉 Application started successfully!")

    yield

    logger.info("👋 Shutting down...")

    sweeper.cancel()
    try:
        await sweeper
    except asyncio.CancelledError:
        pass

    if settings.DATABASE_ENABLED:
        try:
            await base.close_db()
            logger.info("✅ Database connections closed")
        except Exception as e:
            logger.error(f"❌ Database close failed: {e}")

    logger.success("✅ Application shutdown complete")


# 创建 FastAPI 应用
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册 API 路由
app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """健康检查"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "ok"
    }


@app.get("/health")
async def health_check():
    """健康检查（详细）"""
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "services": {}
    }

    if settings.DATABASE_ENABLED:
        try:
            if base.async_engine:
                async with base.async_engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                health_status["services"]["database"] = "healthy"
            else:
                health_status["services"]["database"] = "not_initialized"
        except Exception as e:
            logger.warning(f"⚠️  Database health check failed: {e}")
            health_status["services"]["database"] = "unhealthy"
            health_status["status"] = "degraded"
    else:
        health_status["services"]["database"] = "disabled"

    return health_status


# 异常处理：统一输出 {"error": message}
@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    """业务异常"""
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """请求体格式错误"""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """全局异常处理"""
    logger.error(f"Unhandled exception: {type(exc).__name__}: {str(exc)}")

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "socialfeed.app:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
