"""
FastAPI 依賴：從 Authorization: Bearer <token> 取出令牌並交給 TokenEngine 驗證。
所有驗證失敗一律返回同一個 401，具體失敗類型只寫入 DEBUG 日誌。
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from auth import config as auth_config
from auth import jwt as jwt_lib
from auth.errors import TokenError
from auth.jwt import Claims, TokenEngine

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "
GENERIC_DETAIL = "Not authenticated"


def _unauthorized(detail: str = GENERIC_DETAIL) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    取出 'Bearer ' (不區分大小寫) 之後的令牌並去掉首尾空白。
    缺少頭或前綴錯誤時直接 401，不會進入 verify。
    """
    if not authorization:
        logger.debug("extract_bearer_token: 缺少 Authorization 頭")
        raise _unauthorized()
    if authorization[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        logger.debug("extract_bearer_token: Authorization 頭不是 Bearer 格式")
        raise _unauthorized()
    return authorization[len(BEARER_PREFIX):].strip()


def get_token_engine() -> TokenEngine:
    """提供啟動時加載的 TokenEngine；測試中可用 app.dependency_overrides 替換。"""
    return auth_config.get_token_engine()


def get_current_claims(
    request: Request,
    authorization: Optional[str] = Header(None),
    engine: TokenEngine = Depends(get_token_engine),
) -> Claims:
    """
    驗證 Bearer 令牌並返回 Claims，同時掛到 request.state.claims。
    校驗失敗一律 401。
    """
    token = extract_bearer_token(authorization)
    try:
        claims = engine.verify(token, jwt_lib.now_ts())
    except TokenError as e:
        logger.debug("get_current_claims: 令牌被拒絕, kind=%s", e.kind)
        raise _unauthorized()
    request.state.claims = claims
    return claims
