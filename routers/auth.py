"""
鉴权路由
- 用户名+密码登录（演示帐号来自 JSON 配置，不做用户管理）
- 返回 HS256 Bearer Token，exp 自包含
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from auth import config as auth_config
from auth import jwt as jwt_lib
from auth.dependencies import get_token_engine
from auth.jwt import TokenEngine

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/auth", tags=["鉴权"])


# ============================
# 模型定义
# ============================

class LoginRequest(BaseModel):
    username: str = Field(..., description="用户名")
    password: str = Field(..., description="明文密码（来自 JSON 配置）")


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    username: str
    message: str = "登录成功"


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


# ============================
# 路由
# ============================

@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, engine: TokenEngine = Depends(get_token_engine)) -> TokenResponse:
    """用户名+密码登录，成功后签发令牌。"""
    logger.info(f"用户 {body.username} 尝试登录")
    user = auth_config.authenticate(body.username, body.password)
    if user is None:
        logger.warning(f"用户 {body.username} 登录失败")
        raise _invalid_credentials()

    token = engine.issue(user["username"], user["user_id"], user["role"], jwt_lib.now_ts())
    logger.info(f"用户 {body.username} 登录成功")
    return TokenResponse(token=token, expires_in=engine.lifetime_seconds, username=user["username"])
