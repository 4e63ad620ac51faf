"""基于 loguru 的进程级日志器。

设计目标：
- 带颜色、单行、易读的 stderr 输出
- 自动定位发起日志调用的文件与行号
- PANIC / FATAL 两个升级等级：输出后中断当前操作 / 结束进程
- 单例在首次使用时惰性创建，且只创建一次
"""

from __future__ import annotations

import os
import threading
from typing import Any, Mapping, NoReturn, Optional

from loguru import logger as _logger

from logx.caller import resolve_caller
from logx.config.settings import PathMode, get_settings
from logx.errors import LogxError, PanicError
from logx.formatter import collect_attrs
from logx.handler import ATTRS_KEY, CALL_SITE_KEY, HANDLER_KEY, LogxHandler
from logx.levels import Level, loguru_name

# loguru 启动时自带的 stderr sink
_DEFAULT_SINK_ID = 0


def _ensure_level(level: Level) -> None:
    name = loguru_name(level)
    try:
        existing = _logger.level(name)
    except ValueError:
        # 颜色由 handler 的模板决定，这里不注册
        _logger.level(name, no=int(level))
        return
    if existing.no != level:
        raise LogxError(
            f"loguru level {name} is registered with no={existing.no}, expected {int(level)}"
        )


def configure_logger(
    handler: LogxHandler,
    *,
    replace_existing: bool = False,
    colorize: bool = True,
) -> Any:
    """把处理器安装到 loguru，并返回 loguru logger 实例。

    默认只移除 loguru 自带的 stderr sink（以免同一条日志以 loguru 的默认格式再输出一次），
    其它 sink（包括其它 logx 日志器的 sink）保持不变；``replace_existing=True`` 时移除全部 sink。
    """

    if replace_existing:
        _logger.remove()
    else:
        try:
            _logger.remove(_DEFAULT_SINK_ID)
        except ValueError:
            # 已经被移除
            pass

    for level in (Level.PANIC, Level.FATAL):
        _ensure_level(level)

    # 同步写入：不使用 enqueue，等级与归属判断交给 handler.filter
    handler.sink_id = _logger.add(
        handler.sink,
        level=0,
        format=handler.format,
        filter=handler.filter,
        colorize=colorize,
        backtrace=False,
        diagnose=False,
        enqueue=False,
    )
    return _logger


class Logger:
    """日志入口。

    位置参数作为无键属性原样追加在消息之后，关键字参数渲染为 ``key=value``。
    消息本身不会被 ``str.format`` 处理。每个日志器只输出到自己的处理器。
    """

    def __init__(
        self,
        handler: Optional[LogxHandler] = None,
        *,
        core: Any = None,
        depth: int = 0,
        colorize: bool = True,
    ) -> None:
        self.handler = handler if handler is not None else LogxHandler()
        if core is None:
            core = configure_logger(self.handler, colorize=colorize)
        self._core = core
        self._depth = depth

    def opt(self, *, depth: int = 0) -> "Logger":
        """返回额外跳过 ``depth`` 帧的日志器，供应用自己的封装函数使用。"""
        return Logger(self.handler, core=self._core, depth=self._depth + depth)

    def close(self) -> None:
        """从 loguru 移除该日志器的 sink。"""
        if self.handler.sink_id is not None:
            self._core.remove(self.handler.sink_id)
            self.handler.sink_id = None

    def debug(self, message: str, *args: Any, **attrs: Any) -> bool:
        return self._log(Level.DEBUG, message, args, attrs)

    def info(self, message: str, *args: Any, **attrs: Any) -> bool:
        return self._log(Level.INFO, message, args, attrs)

    def warn(self, message: str, *args: Any, **attrs: Any) -> bool:
        return self._log(Level.WARN, message, args, attrs)

    warning = warn

    def error(self, message: str, *args: Any, **attrs: Any) -> bool:
        return self._log(Level.ERROR, message, args, attrs)

    def log(self, level: Any, message: str, *args: Any, **attrs: Any) -> bool:
        """按任意等级输出；PANIC/FATAL 在这里只输出，不触发中断。"""
        return self._log(Level.parse(level), message, args, attrs)

    def panic(self, message: str, *args: Any, **attrs: Any) -> None:
        """输出 PANIC 日志后抛出 PanicError；PANIC 未启用时什么也不做。"""
        self._terminate(Level.PANIC, message, args, attrs)

    def fatal(self, message: str, *args: Any, **attrs: Any) -> NoReturn:
        """输出 FATAL 日志后以状态码 1 立即结束进程。"""
        self._terminate(Level.FATAL, message, args, attrs)

    def _terminate(
        self,
        level: Level,
        message: str,
        args: tuple[Any, ...],
        attrs: Mapping[str, Any],
    ) -> Any:
        if level is Level.PANIC:
            if not self.handler.enabled(Level.PANIC):
                return None
            self._log(level, message, args, attrs, stacklevel=2)
            raise PanicError(message, collect_attrs(args, attrs))

        self._log(level, message, args, attrs, stacklevel=2)
        # 不做清理、不展开调用栈；日志行在写出时已经 flush
        os._exit(1)

    def _log(
        self,
        level: Level,
        message: str,
        args: tuple[Any, ...],
        attrs: Mapping[str, Any],
        stacklevel: int = 1,
    ) -> bool:
        """发出一条记录；返回是否通过了等级门控。

        ``stacklevel`` 是从调用 ``_log`` 的入口到应用代码之间的帧数。
        """

        handler = self.handler
        if not handler.enabled(level):
            return False

        call_site = None
        if handler.settings.path_mode is not PathMode.ABSENT:
            call_site = resolve_caller(stacklevel + self._depth + 1)

        extra = {
            HANDLER_KEY: handler,
            CALL_SITE_KEY: call_site,
            ATTRS_KEY: collect_attrs(args, attrs),
        }
        self._core.bind(**extra).log(loguru_name(level), str(message))
        return True


_LOGGER: Optional[Logger] = None
_LOCK = threading.Lock()


def _build_logger() -> Logger:
    # 进程级处理器同时输出直接调用 loguru.logger 的记录
    return Logger(LogxHandler(catch_untagged=True))


def get_logger() -> Logger:
    """返回进程级单例；并发的首次调用只会创建一次。"""

    global _LOGGER
    if _LOGGER is None:
        with _LOCK:
            if _LOGGER is None:
                _LOGGER = _build_logger()
    return _LOGGER


def set_level(level: Any) -> None:
    """设置最低输出等级，默认 Level.DEBUG。低于该等级的调用既不输出也不触发中断。"""
    get_settings().level = level


def set_path_mode(mode: Any) -> None:
    """设置调用位置的显示方式，默认 PathMode.SHORT。"""
    get_settings().path_mode = mode


def debug(message: str, *args: Any, **attrs: Any) -> bool:
    """输出 DEBUG 日志，蓝色。"""
    return get_logger()._log(Level.DEBUG, message, args, attrs)


def info(message: str, *args: Any, **attrs: Any) -> bool:
    """输出 INFO 日志，白色。"""
    return get_logger()._log(Level.INFO, message, args, attrs)


def warn(message: str, *args: Any, **attrs: Any) -> bool:
    """输出 WARN 日志，黄色。"""
    return get_logger()._log(Level.WARN, message, args, attrs)


warning = warn


def error(message: str, *args: Any, **attrs: Any) -> bool:
    """输出 ERROR 日志，红色。"""
    return get_logger()._log(Level.ERROR, message, args, attrs)


def panic_log(message: str, *args: Any, **attrs: Any) -> None:
    """输出 PANIC 日志（红色）后抛出 PanicError。"""
    get_logger()._terminate(Level.PANIC, message, args, attrs)


def fatal(message: str, *args: Any, **attrs: Any) -> NoReturn:
    """输出 FATAL 日志（红色）后立即结束进程。"""
    get_logger()._terminate(Level.FATAL, message, args, attrs)


__all__ = [
    "Logger",
    "configure_logger",
    "get_logger",
    "set_level",
    "set_path_mode",
    "debug",
    "info",
    "warn",
    "warning",
    "error",
    "panic_log",
    "fatal",
]
