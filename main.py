from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from auth import config as auth_config
from logging_config import get_colorful_logger
from routers import include_routers

# 配置彩色日志
logger = get_colorful_logger(__name__)


def configure_auth_logging() -> logging.Logger:
    """按当前配置设置 auth 包的日志级别；jwt_debug 开启时输出引擎的诊断事件"""
    return get_colorful_logger("auth", level=logging.DEBUG if auth_config.is_jwt_debug() else logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理器"""
    logger.info("正在初始化认证系统...")
    auth_config._init_config()
    configure_auth_logging()
    snapshot = auth_config.get_effective_config_snapshot()
    logger.info(
        f"认证系统初始化完成 (users={len(snapshot['users'])}, "
        f"expires={snapshot['jwt_expires_seconds']}s, debug={snapshot['jwt_debug']})"
    )
    yield
    logger.info("应用已关闭")


def create_app() -> FastAPI:
    app = include_routers(FastAPI(lifespan=lifespan))

    # 中间件：记录请求和响应信息
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        # 只记录路径，不记录查询串与请求头（可能携带令牌）
        logger.info(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(f"Response: {response.status_code} (处理时间: {process_time:.2f}s)")
        return response

    app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)

    # CORS 配置：允许静态前端页面跨域访问
    app.add_middleware(
        CORSMiddleware,
        allow_origins=auth_config.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=5000, reload=True, workers=1)
