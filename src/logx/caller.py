"""调用位置解析。

日志调用链上的帧数是固定的，因此每个入口都使用一个明确的跳过帧数：

==============================================  ==========================
入口                                            从 ``Logger._log`` 跳过的帧数
==============================================  ==========================
``debug/info/warn/error``（模块函数或方法）     2
``Logger.log``                                  2
``panic_log/fatal``（模块函数或方法）           3（经过 ``Logger._terminate``）
``Logger.opt(depth=n)``                         在上述基础上 + n
==============================================  ==========================

到达目标帧后，如果该帧仍属于日志子系统（``logx`` 或 ``loguru`` 包），
再向上最多检查 ``MAX_WALK`` 帧，取第一个不属于日志子系统的帧。
栈深度不足或超出检查范围时返回 ``UNKNOWN``，不会抛出异常。
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from types import FrameType
from typing import Optional

# 视为日志子系统内部的包（按模块 __name__ 匹配）
INTERNAL_PACKAGES: tuple[str, ...] = ("logx", "loguru")

MAX_WALK = 13


@dataclass(frozen=True)
class CallSite:
    """一次日志调用的位置；每条记录都重新计算，不做缓存。"""

    file: str
    line: int

    @property
    def known(self) -> bool:
        return self != UNKNOWN

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


UNKNOWN = CallSite("unknown", 0)


def is_internal_frame(frame: FrameType) -> bool:
    """判断帧是否来自日志子系统自身。"""

    module = frame.f_globals.get("__name__") or ""
    return any(
        module == package or module.startswith(package + ".")
        for package in INTERNAL_PACKAGES
    )


def resolve_caller(skip: int = 0, max_walk: int = MAX_WALK) -> CallSite:
    """返回发起日志调用的应用代码位置。

    ``skip`` 表示从调用 ``resolve_caller`` 的函数向上跳过的帧数：
    ``skip=0`` 即调用者自身所在的帧。
    """

    try:
        frame: Optional[FrameType] = sys._getframe(skip + 1)
    except ValueError:
        # 调用栈不够深
        return UNKNOWN

    for _ in range(max_walk + 1):
        if frame is None:
            break
        if not is_internal_frame(frame):
            return CallSite(frame.f_code.co_filename, frame.f_lineno)
        frame = frame.f_back
    return UNKNOWN


__all__ = [
    "CallSite",
    "UNKNOWN",
    "INTERNAL_PACKAGES",
    "MAX_WALK",
    "is_internal_frame",
    "resolve_caller",
]
