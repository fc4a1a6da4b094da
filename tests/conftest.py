import os
import sys
import pytest

# 确保项目根目录在 sys.path 中
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from logging_config import get_colorful_logger
from auth.jwt import TokenEngine

TEST_KEY = "unit-test-signing-key-with-enough-length-for-hs256!"
NOW = 1700000000


@pytest.fixture(scope="session")
def logger():
    """提供一个带彩色格式的测试级别 logger"""
    return get_colorful_logger("tests")


@pytest.fixture
def engine():
    """一小时有效期、固定密钥的引擎"""
    return TokenEngine(TEST_KEY)


@pytest.fixture
def admin_token(engine):
    """在 NOW 时刻签发的 admin 令牌"""
    return engine.issue("admin", "1", "admin", now=NOW)
