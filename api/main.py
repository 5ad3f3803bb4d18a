"""
FastAPI 应用主入口
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import metrics
from api.dependencies import close_clients
from api.routers import designs, structures
from api.middleware.logging import LoggingMiddleware
from api.middleware.error_handler import (
    DesignFailedError,
    ErrorCode,
    StructureFormatError,
    design_failed_handler,
    structure_format_error_handler,
)
from api.schemas.response import error_response, success_response
from core.config import get_settings
from logging_config import setup_logging, get_logger

# 获取配置
settings = get_settings()

# 配置日志
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理

    启动时记录配置（已脱敏），关闭时释放 AI 客户端连接
    """
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        config=settings.display_config(),
    )

    if not settings.genai.is_configured:
        logger.warning("genai_api_key_missing", hint="set API_KEY or GENAI_API_KEY")

    app.state.start_time = datetime.utcnow()

    logger.info("application_started")

    yield

    logger.info("application_shutting_down")

    await close_clients()

    logger.info("application_stopped")


# 创建 FastAPI 应用
app = FastAPI(
    title=settings.app_name,
    description="MatForge - AI-assisted design of sustainable functional soft materials with molecular structure preview",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)

# ===== 中间件 =====

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 请求日志
app.add_middleware(LoggingMiddleware)


# ===== 路由 =====

# API 版本前缀
API_PREFIX = settings.api_prefix


# 健康检查 (无前缀)
@app.get("/health")
async def health_check_root():
    """根路径健康检查"""
    return success_response(
        data={
            "status": "healthy",
            "version": settings.app_version,
        }
    )


# 带前缀的健康检查
@app.get(f"{API_PREFIX}/health")
async def health_check():
    """API 健康检查"""
    uptime = (datetime.utcnow() - app.state.start_time).total_seconds() if hasattr(app.state, 'start_time') else 0

    return success_response(
        data={
            "status": "healthy",
            "version": settings.app_version,
            "uptime_seconds": round(uptime, 2),
            "environment": settings.environment,
            "genai_configured": settings.genai.is_configured,
        }
    )


# 注册路由
app.include_router(designs.router, prefix=f"{API_PREFIX}/designs", tags=["Designs"])
app.include_router(structures.router, prefix=f"{API_PREFIX}/structures", tags=["Structures"])
app.include_router(metrics.router, prefix="/metrics", tags=["Metrics"])


# ===== 全局异常处理 =====

app.add_exception_handler(StructureFormatError, structure_format_error_handler)
app.add_exception_handler(DesignFailedError, design_failed_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """全局异常处理器"""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content=error_response(
            message="内部服务器错误",
            code=ErrorCode.INTERNAL_ERROR,
            error_type="InternalError",
            detail="发生未预期的错误，请联系管理员" if not settings.debug else str(exc),
        ),
    )


# ===== 开发模式入口 =====

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
