from __future__ import annotations

from typing import Any, Sequence


class LogxError(Exception):
    """logx 通用错误类型。"""


class PanicError(LogxError):
    """PANIC 等级输出后抛出，用于中断当前操作。

    与 FATAL 不同，它只是普通异常，外层代码可以捕获并恢复。
    """

    def __init__(self, message: str, attrs: Sequence[tuple[str, Any]] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.attrs = tuple(attrs)


__all__ = ["LogxError", "PanicError"]
