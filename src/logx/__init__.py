"""logx：带调用位置与颜色的进程级日志工具。

提供基于 loguru 的单行日志输出，特性包括：
- DEBUG/INFO/WARN/ERROR 之外的 PANIC（抛出 PanicError）与 FATAL（结束进程）
- 自动定位调用日志的文件与行号
- 彩色 stderr 输出，可配置路径显示方式
"""

from .caller import CallSite
from .config import LogSettings, PathMode, get_settings
from .errors import LogxError, PanicError
from .handler import LogxHandler
from .levels import Level
from .logger import (
    Logger,
    configure_logger,
    debug,
    error,
    fatal,
    get_logger,
    info,
    panic_log,
    set_level,
    set_path_mode,
    warn,
    warning,
)

__all__ = [
    "CallSite",
    "Level",
    "LogSettings",
    "Logger",
    "LogxError",
    "LogxHandler",
    "PanicError",
    "PathMode",
    "configure_logger",
    "debug",
    "error",
    "fatal",
    "get_logger",
    "get_settings",
    "info",
    "panic_log",
    "set_level",
    "set_path_mode",
    "warn",
    "warning",
]
