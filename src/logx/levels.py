"""日志等级模型。

在标准的 DEBUG/INFO/WARN/ERROR 之上增加两个升级等级：

- ``PANIC``：输出后中断当前操作（抛出 ``PanicError``）
- ``FATAL``：输出后立即结束进程

数值沿用 loguru 的刻度，因此直接经由 loguru 发出的记录（TRACE、SUCCESS、
CRITICAL 等）也能与本模块的等级正确比较。``PANIC`` 与 ``FATAL`` 的数值是保留值，
调用方不能以其它数值重新定义这两个名字。
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class Level(IntEnum):
    """有序的日志等级。"""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    PANIC = 60
    FATAL = 70

    @classmethod
    def parse(cls, value: Any) -> "Level":
        """把 Level、整数或等级名称（大小写不敏感）转换为 Level。"""

        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"unknown log level: {value}") from None
        if isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            if name in cls.__members__:
                return cls[name]
        raise ValueError(f"unknown log level: {value!r}")


_ALIASES = {
    "WARNING": "WARN",
    "ERR": "ERROR",
}

# 扩展等级的显示名称是自定义的
_CUSTOM_LABELS = {
    Level.PANIC: "PANIC",
    Level.FATAL: "FATAL",
}

_STANDARD = (Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR)

# 派发到 loguru 时使用的等级名称
_LOGURU_NAMES = {
    Level.DEBUG: "DEBUG",
    Level.INFO: "INFO",
    Level.WARN: "WARNING",
    Level.ERROR: "ERROR",
    Level.PANIC: "PANIC",
    Level.FATAL: "FATAL",
}


def label_of(level: int) -> str:
    """返回等级的显示名称。

    扩展等级返回自定义名称；标准等级返回其名称；其它整数按“最近的较低标准等级
    加偏移量”的形式表示，例如 ``ERROR+10``、``DEBUG-5``。
    """

    if level in _CUSTOM_LABELS:
        return _CUSTOM_LABELS[Level(level)]
    base = Level.DEBUG
    for candidate in _STANDARD:
        if level >= candidate:
            base = candidate
    offset = level - base
    if offset == 0:
        return base.name
    return f"{base.name}{offset:+d}"


def color_of(level: int) -> str:
    """返回等级对应的 loguru 颜色标记名；ERROR 及所有其它等级使用红色。"""

    if level == Level.INFO:
        return "white"
    if level == Level.DEBUG:
        return "blue"
    if level == Level.WARN:
        return "yellow"
    return "red"


def loguru_name(level: Level) -> str:
    return _LOGURU_NAMES[level]


__all__ = [
    "Level",
    "label_of",
    "color_of",
    "loguru_name",
]
