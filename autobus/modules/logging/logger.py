"""日志配置模块。

基于 loguru，延迟初始化：导入时不添加任何处理器。
应用启动时调用 configure_from_config() 进行配置；未配置前调用 get_logger()
会自动挂上一个默认的 stderr 处理器。
"""

import json
import os
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from loguru import logger as loguru_logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan> - <level>{message}</level>"
)

# 模块级状态
_CONFIGURED = False
_HANDLER_IDS: list[int] = []
_DEFAULT_HANDLER_ID: int | None = None


def _ensure_default_handler():
    """确保默认 stderr 处理器存在（仅在尚未配置时创建）。"""
    global _DEFAULT_HANDLER_ID
    if _DEFAULT_HANDLER_ID is None and not _CONFIGURED:
        _DEFAULT_HANDLER_ID = loguru_logger.add(
            sys.stderr,
            level="INFO",
            colorize=True,
            format=CONSOLE_FORMAT,
        )
    return _DEFAULT_HANDLER_ID


def _build_module_filter(filter_config) -> Optional[Callable]:
    """根据 filter 配置构造 loguru 过滤函数，WARNING 及以上总是放行。"""
    if not filter_config:
        return None
    if callable(filter_config):
        return filter_config

    allowed = set(filter_config)

    def module_filter(record):
        module = record["extra"].get("module", "unknown")
        return module in allowed or record["level"].no >= loguru_logger.level("WARNING").no

    return module_filter


def configure_from_config(config: Union[Dict[str, Any], Any, None] = None) -> None:
    """从配置配置日志。

    应在应用启动时调用一次，会移除 loguru 现有的全部处理器。

    Args:
        config: 日志配置，可以是 dict 或 LoggingConfig 实例，支持的键：
            - enabled: bool - 启用文件日志（默认：False）
            - format: "jsonl" | "text" - 文件日志格式（默认："jsonl"）
            - directory: str - 日志目录（默认："logs"）
            - level: str - 文件日志级别（默认："INFO"）
            - console_level: str - 控制台日志级别（默认："INFO"）
            - rotation / retention / compression: 文本文件日志的轮转参数
            - split_by_session: bool - 每次启动生成新文件（默认：False）
            - filter: list[str] | callable - 仅显示这些模块的 INFO/DEBUG 日志
    """
    global _CONFIGURED, _DEFAULT_HANDLER_ID

    if config is not None and hasattr(config, "model_dump"):
        config = config.model_dump()
    config = config or {}

    _CONFIGURED = True
    loguru_logger.remove()
    _DEFAULT_HANDLER_ID = None
    _HANDLER_IDS.clear()

    _HANDLER_IDS.append(
        loguru_logger.add(
            sys.stderr,
            level=config.get("console_level", "INFO"),
            colorize=True,
            format=CONSOLE_FORMAT,
            filter=_build_module_filter(config.get("filter")),
        )
    )

    if not config.get("enabled", False):
        return

    directory = config.get("directory", "logs")
    level = config.get("level", "INFO")
    split_by_session = config.get("split_by_session", False)

    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        loguru_logger.warning(f"无法创建日志目录 {directory}，将仅使用控制台输出: {e}")
        return

    if config.get("format", "jsonl") == "jsonl":
        timestamp = time.strftime("%Y%m%d_%H%M%S" if split_by_session else "%Y-%m-%d")
        jsonl_path = Path(directory) / f"autobus_{timestamp}.jsonl"

        # serialize=True 时 loguru 传入 {"text": ..., "record": {...}}
        def json_sink(message):
            record = json.loads(message)["record"]
            log_obj = {
                "timestamp": record["time"]["repr"],
                "level": record["level"]["name"],
                "module": record["extra"].get("module", "unknown"),
                "message": record["message"],
            }
            with open(jsonl_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_obj, ensure_ascii=False) + "\n")

        _HANDLER_IDS.append(loguru_logger.add(json_sink, level=level, serialize=True))
        return

    if split_by_session:
        file_path = os.path.join(directory, f"autobus_{time.strftime('%Y%m%d_%H%M%S')}.log")
    else:
        file_path = os.path.join(directory, "autobus_{time:YYYY-MM-DD}.log")
    _HANDLER_IDS.append(
        loguru_logger.add(
            file_path,
            level=level,
            format=CONSOLE_FORMAT,
            rotation=config.get("rotation", "10 MB"),
            retention=config.get("retention", "7 days"),
            compression=config.get("compression", "zip"),
            encoding="utf-8",
        )
    )


def get_logger(module_name: str):
    """获取绑定了模块名的 logger 实例。

    Args:
        module_name: 模块名称，用于标识日志来源

    Returns:
        绑定了 extra["module"] 的 loguru logger
    """
    _ensure_default_handler()
    return loguru_logger.bind(module=module_name)


__all__ = ["get_logger", "configure_from_config"]
