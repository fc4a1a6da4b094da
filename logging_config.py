"""
彩色日志配置模块
基于 rich 的统一日志配置
"""
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_colorful_logging(level: int = logging.INFO, name: Optional[str] = None) -> logging.Logger:
    """
    设置彩色日志配置；重复调用只更新级别，不会重复添加处理器

    Args:
        level: 日志级别
        name: 日志器名称

    Returns:
        配置好的日志器
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = RichHandler(
        console=Console(),
        show_time=True,
        show_level=True,
        show_path=False,
        enable_link_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
    )
    handler.setLevel(level)
    # RichHandler 自己输出时间和级别
    handler.setFormatter(logging.Formatter('%(message)s', datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)
    return logger


def get_colorful_logger(name: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """
    获取彩色日志器

    Args:
        name: 日志器名称
        level: 日志级别

    Returns:
        彩色日志器
    """
    return setup_colorful_logging(level=level, name=name)
