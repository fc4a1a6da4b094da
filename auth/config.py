"""
Auth configuration loader and helpers.

- Loads JSON config from ENV AUTH_CONFIG_PATH or default './data/auth.json'.
- Provides read-only accessors for demo principals and token settings.
- JWT secret priority: ENV JWT_SECRET > config.jwt_secret > random per-process secret
- JWT expires seconds default: 3600 (overridable via config.jwt_expires_seconds)
- Engine diagnostics: ENV JWT_DEBUG > config.jwt_debug > off
- On missing/invalid config file: log WARNING, use empty users and default settings.
"""

from __future__ import annotations

import hmac
import json
import logging
import os
import secrets
from typing import Any, Dict, List, Optional

from auth.jwt import DEFAULT_LIFETIME_SECONDS, TokenEngine

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = os.path.join(".", "data", "auth.json")
_DEFAULT_EXPIRES_SECONDS = DEFAULT_LIFETIME_SECONDS
_DEFAULT_CORS = ["*"]

_ENV_CONFIG_PATH = "AUTH_CONFIG_PATH"
_ENV_JWT_SECRET = "JWT_SECRET"
_ENV_JWT_DEBUG = "JWT_DEBUG"
_ENV_DEFAULT_ADMIN_PASSWORD = "DEFAULT_ADMIN_PASSWORD"

_TRUTHY = {"1", "true", "yes", "on"}

_CONFIG: Dict[str, Any] = {}
_ENGINE: Optional[TokenEngine] = None

# 未知用戶也做一次同樣長度的比較，登錄失敗的耗時不暴露用戶是否存在
_DUMMY_USER = {"username": "", "password": secrets.token_urlsafe(16), "user_id": "", "role": ""}


def _effective_config_path() -> str:
    """返回有效的配置路徑，優先 ENV AUTH_CONFIG_PATH，其次默認路徑。"""
    env_path = os.environ.get(_ENV_CONFIG_PATH)
    if env_path and str(env_path).strip():
        return str(env_path)
    return _DEFAULT_CONFIG_PATH


def _load_file(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        logger.warning("Auth config %s not found; using defaults", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to read auth config %s: %s; using defaults", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Auth config %s is not a JSON object; using defaults", path)
        return {}
    return data


def _normalize_user(raw: Any) -> Optional[Dict[str, str]]:
    """只保留字段齊全的演示帳號 (username/password/user_id/role 均為字符串)。"""
    if not isinstance(raw, dict):
        return None
    fields = ("username", "password", "user_id", "role")
    if not all(isinstance(raw.get(k), str) and raw.get(k) for k in fields):
        return None
    return {k: raw[k] for k in fields}


def _init_config() -> None:
    """
    初始化配置：讀取 JSON 文件，再做環境變量覆蓋與結構/類型規整。
    可重複調用；測試中通過 importlib.reload 重新執行。
    """
    global _CONFIG, _ENGINE
    cfg = _load_file(_effective_config_path())

    # 環境變量覆蓋
    secret = os.environ.get(_ENV_JWT_SECRET) or cfg.get("jwt_secret")
    if not isinstance(secret, str) or not secret:
        logger.warning("No JWT secret configured; generated an ephemeral secret, tokens will not survive a restart")
        secret = secrets.token_urlsafe(32)
    cfg["jwt_secret"] = secret

    expires = cfg.get("jwt_expires_seconds", _DEFAULT_EXPIRES_SECONDS)
    if isinstance(expires, bool) or not isinstance(expires, int) or expires <= 0:
        logger.warning("Invalid jwt_expires_seconds in config; using default %d", _DEFAULT_EXPIRES_SECONDS)
        expires = _DEFAULT_EXPIRES_SECONDS
    cfg["jwt_expires_seconds"] = expires

    env_debug = os.environ.get(_ENV_JWT_DEBUG)
    if env_debug is not None:
        cfg["jwt_debug"] = env_debug.strip().lower() in _TRUTHY
    else:
        cfg["jwt_debug"] = bool(cfg.get("jwt_debug", False))

    # 類型規整
    raw_users = cfg.get("users")
    users = [u for u in (_normalize_user(r) for r in raw_users) if u] if isinstance(raw_users, list) else []
    admin_pw = os.environ.get(_ENV_DEFAULT_ADMIN_PASSWORD)
    if admin_pw and admin_pw.strip() and not any(u["username"] == "admin" for u in users):
        users.append({"username": "admin", "password": admin_pw, "user_id": "1", "role": "admin"})
    cfg["users"] = users

    cors = cfg.get("cors")
    if not isinstance(cors, list) or not all(isinstance(o, str) for o in cors):
        cors = list(_DEFAULT_CORS)
    cfg["cors"] = cors

    _CONFIG = cfg
    # 密鑰只在加載配置時交給引擎一次，之後的請求共用同一個實例
    _ENGINE = _build_engine(cfg)
    logger.debug("Auth config loaded. users=%d, expires=%d, debug=%s", len(users), expires, cfg["jwt_debug"])


def get_users() -> List[Dict[str, str]]:
    """返回已配置演示帳號列表的副本。"""
    return [dict(u) for u in _CONFIG.get("users", [])]


def find_user(username: str) -> Optional[Dict[str, str]]:
    """通過用戶名查找演示帳號。"""
    if not username:
        return None
    for u in _CONFIG.get("users", []):
        if u.get("username") == username:
            return dict(u)
    return None


def check_password(user: Dict[str, str], password: str) -> bool:
    """常數時間比較明文演示密碼。"""
    stored = user.get("password", "")
    return hmac.compare_digest(stored.encode("utf-8"), (password or "").encode("utf-8"))


def authenticate(username: str, password: str) -> Optional[Dict[str, str]]:
    """
    校驗演示帳號，成功返回帳號記錄，否則返回 None。
    用戶不存在時仍與占位帳號比較一次密碼。
    """
    user = find_user(username)
    if user is None:
        check_password(_DUMMY_USER, password)
        return None
    if not check_password(user, password):
        return None
    return user


def get_jwt_secret() -> str:
    """獲取加載配置時確定的 JWT 密鑰 (ENV JWT_SECRET > config > 隨機密鑰)。"""
    return _CONFIG["jwt_secret"]


def get_jwt_expires_seconds() -> int:
    """獲取 JWT 到期時間 (秒，默認為 3600)。"""
    return _CONFIG.get("jwt_expires_seconds", _DEFAULT_EXPIRES_SECONDS)


def is_jwt_debug() -> bool:
    return bool(_CONFIG.get("jwt_debug", False))


def get_cors_origins() -> List[str]:
    return list(_CONFIG.get("cors", _DEFAULT_CORS))


def _build_engine(cfg: Dict[str, Any]) -> TokenEngine:
    return TokenEngine(
        cfg["jwt_secret"],
        lifetime_seconds=cfg["jwt_expires_seconds"],
        debug=cfg["jwt_debug"],
    )


def get_token_engine() -> TokenEngine:
    """返回本次配置加載時構建的 TokenEngine；重新 _init_config 之前始終是同一個實例。"""
    return _ENGINE


def get_effective_config_snapshot() -> Dict[str, Any]:
    """
    返回有效配置的淺拷貝 (用於診斷或測試)，不含密鑰與密碼。
    """
    snapshot = {k: v for k, v in _CONFIG.items() if k not in ("jwt_secret", "users")}
    snapshot["users"] = [{"username": u["username"], "user_id": u["user_id"], "role": u["role"]} for u in _CONFIG.get("users", [])]
    snapshot["config_path"] = _effective_config_path()
    snapshot["jwt_secret_from_env"] = bool(os.environ.get(_ENV_JWT_SECRET))
    return snapshot


# 在模塊加載時自動初始化配置
_init_config()
