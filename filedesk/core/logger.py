# filedesk/core/logger.py
import os
import sys
from pathlib import Path

from loguru import logger

from filedesk.config.config_settings.config_schema import LoggingConfig

# 获取运行环境
ENV = os.getenv("ENV", "dev").lower()

# 清除默认 handler
logger.remove()

# 控制台输出
logger.add(
    sys.stderr,
    level="DEBUG" if ENV in ("dev", "development") else "INFO",
    colorize=True,
    backtrace=True,
    diagnose=ENV in ("dev", "development"),
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level: <8}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>"
)

_file_sink_ids: list = []


def configure_file_logging(config: LoggingConfig) -> None:
    """
    根据 LoggingConfig 添加文件日志输出。
    控制台输出在模块导入时就已配置好，文件输出依赖配置，所以由应用启动时调用。
    重复调用会先移除上一次添加的文件 handler。
    """
    while _file_sink_ids:
        logger.remove(_file_sink_ids.pop())

    if not config.enable_file:
        return

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # 普通文本日志输出到文件
    _file_sink_ids.append(logger.add(
        log_dir / "filedesk.log",
        level="DEBUG",
        rotation=config.rotation,
        retention=config.retention,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
    ))

    # JSON 结构化日志输出，只记录警告及以上
    _file_sink_ids.append(logger.add(
        log_dir / "filedesk.json",
        level="WARNING",
        rotation=config.rotation,
        retention=config.retention,
        serialize=True,
        encoding="utf-8",
        enqueue=True,
    ))
    logger.debug(f"File logging enabled in {log_dir}")


def get_logger(name: str = None):
    """仿 logging.getLogger() 实现的 loguru logger 工厂方法"""
    if name:
        return logger.bind(module=name)
    return logger
