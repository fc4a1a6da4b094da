"""
受保护的用户路由：需要有效的 Bearer 令牌
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from auth.dependencies import get_current_claims
from auth.jwt import Claims

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["用户"])


class ProfileResponse(BaseModel):
    username: str
    userId: str
    role: str
    expiresAt: int
    message: str = "这是受保护的用户信息，需要有效的令牌才能访问"


class SecureItem(BaseModel):
    id: int
    name: str
    value: str


class SecureDataResponse(BaseModel):
    data: List[SecureItem]
    message: str = "这些是需要认证才能获取的敏感数据"


_SECURE_DATA = [
    SecureItem(id=1, name="机密数据1", value="重要信息A"),
    SecureItem(id=2, name="机密数据2", value="重要信息B"),
    SecureItem(id=3, name="机密数据3", value="重要信息C"),
]


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(claims: Claims = Depends(get_current_claims)) -> ProfileResponse:
    """返回令牌中的用户信息"""
    logger.debug(f"获取用户资料: userId={claims.subject_id}")
    return ProfileResponse(
        username=claims.subject,
        userId=claims.subject_id,
        role=claims.role,
        expiresAt=claims.expires_at,
    )


@router.get("/data", response_model=SecureDataResponse)
async def get_secure_data(claims: Claims = Depends(get_current_claims)) -> SecureDataResponse:
    """返回演示用的机密数据"""
    logger.debug(f"获取机密数据: userId={claims.subject_id}")
    return SecureDataResponse(data=list(_SECURE_DATA))
