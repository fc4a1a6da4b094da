"""
健康检查路由
"""
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(prefix="/api/health", tags=["健康检查"])


class HealthStatus(BaseModel):
    """健康状态响应模型"""
    status: str
    timestamp: str


@router.get("", response_model=HealthStatus)
async def get_system_health():
    """获取系统健康状态"""
    return HealthStatus(status="healthy", timestamp=datetime.now(timezone.utc).isoformat())
