#!/usr/bin/env python3
"""
調試腳本：登錄運行中的服務，並在本地用配置的密鑰驗證拿到的令牌。
與線上接口不同，這裡會打印具體的失敗類型，僅供開發調試使用。

用法: python debug_token.py [username] [password] [base_url]
"""

import sys

import requests

from auth import config as auth_config
from auth import jwt as jwt_lib
from auth.errors import TokenError

BASE_URL = "http://localhost:5000"


def login(username: str, password: str, base_url: str = BASE_URL) -> str:
    """登錄並返回令牌；失敗時拋出 requests.HTTPError。"""
    response = requests.post(
        f"{base_url}/api/auth/login",
        json={"username": username, "password": password},
        timeout=10,
    )
    response.raise_for_status()
    return response.json()["token"]


def inspect_token(token: str) -> int:
    """本地驗證令牌，打印 claims 或失敗類型。返回進程退出碼。"""
    engine = auth_config.get_token_engine()
    try:
        claims = engine.verify(token, jwt_lib.now_ts())
    except TokenError as e:
        print(f"令牌驗證失敗: {e.kind} ({e})")
        return 1
    print("令牌驗證成功:")
    for key, value in claims.to_payload().items():
        print(f"  {key}: {value}")
    return 0


def main(argv) -> int:
    username = argv[1] if len(argv) > 1 else "admin"
    password = argv[2] if len(argv) > 2 else "password"
    base_url = argv[3] if len(argv) > 3 else BASE_URL
    try:
        token = login(username, password, base_url)
    except requests.RequestException as e:
        print(f"登錄失敗: {e}")
        return 2
    print(f"登錄成功，令牌長度: {len(token)}")
    return inspect_token(token)


if __name__ == "__main__":
    sys.exit(main(sys.argv))
