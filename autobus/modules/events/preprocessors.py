"""
常用预处理器

把监听器的通知转移到其他执行上下文：
- EventLoopPreprocessor: 投递到 asyncio 事件循环所在线程
- ExecutorPreprocessor: 投递到线程池 / 进程池

两者都不会等待监听器执行完成，emit 立即返回。
"""

import asyncio
from concurrent.futures import Executor, Future
from typing import Any

from autobus.modules.events.listener import BusListener, Preprocessor
from autobus.modules.logging import get_logger


class EventLoopPreprocessor(Preprocessor):
    """在指定事件循环上执行通知（线程安全）"""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop
        self.logger = get_logger("EventLoopPreprocessor")

    def __call__(self, listener: BusListener, data: Any) -> None:
        try:
            self.loop.call_soon_threadsafe(listener.notify_event, data)
        except RuntimeError:
            # 事件循环已关闭
            self.logger.warning(f"事件循环已关闭，丢弃通知: {listener!r}")


class ExecutorPreprocessor(Preprocessor):
    """在 Executor 中执行通知，监听器异常记录到日志"""

    def __init__(self, executor: Executor):
        self.executor = executor
        self.logger = get_logger("ExecutorPreprocessor")

    def __call__(self, listener: BusListener, data: Any) -> None:
        future = self.executor.submit(listener.notify_event, data)
        future.add_done_callback(lambda f: self._log_failure(f, listener))

    def _log_failure(self, future: Future, listener: BusListener) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self.logger.opt(exception=exc).error(f"监听器执行错误 ({listener!r}): {exc}")
