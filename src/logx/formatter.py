"""单行日志的渲染与写出。

输出格式（loguru 颜色标记）::

    <bold><white>HH:MM:SS [file:line][LEVEL]:</white><color> message key=value ...</color></bold>

路径模式为 ABSENT 时省略 ``[file:line]`` 段。模板里只有颜色标记和占位符，
时间、位置、属性等文本先写入 record["extra"]，再由 loguru 填入，
因此消息或属性里的 ``<tag>``、``{}`` 都会原样输出。
"""

from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence, TextIO

from logx.caller import CallSite
from logx.config.settings import PathMode
from logx.levels import color_of, label_of

# 无键值（格式不正确）的属性使用的键，渲染时只输出值
BAD_KEY = "!BADKEY"

# 渲染结果在 record["extra"] 中的键
HEAD_KEY = "logx_head"
ATTRS_TEXT_KEY = "logx_attrs_text"

Attr = tuple[str, Any]


def collect_attrs(args: Iterable[Any], kwargs: Mapping[str, Any]) -> tuple[Attr, ...]:
    """把位置参数与关键字参数展开为有序的 (key, value) 列表。

    位置参数没有键，记为 ``BAD_KEY``；位置参数在前，关键字参数按传入顺序在后。
    """

    attrs: list[Attr] = [(BAD_KEY, value) for value in args]
    attrs.extend(kwargs.items())
    return tuple(attrs)


def render_attrs(attrs: Sequence[Attr]) -> str:
    """渲染属性段；没有属性时返回空字符串。"""

    parts = []
    for key, value in attrs:
        if key == BAD_KEY:
            parts.append(f" {value}")
        else:
            parts.append(f" {key}={value}")
    return "".join(parts)


def display_site(call_site: Optional[CallSite], mode: PathMode) -> Optional[CallSite]:
    if mode is PathMode.ABSENT or call_site is None:
        return None
    if mode is PathMode.SHORT and call_site.known:
        return CallSite(os.path.basename(call_site.file), call_site.line)
    return call_site


def format_head(
    time: datetime,
    level: int,
    call_site: Optional[CallSite],
    mode: PathMode,
    time_format: str = "%H:%M:%S",
) -> str:
    """渲染消息之前的部分：``HH:MM:SS [file:line][LEVEL]:``。"""

    site = display_site(call_site, mode)
    location = "" if site is None else f"[{site}]"
    return f"{time.strftime(time_format)} {location}[{label_of(level)}]:"


def line_template(level: int) -> str:
    """返回交给 loguru 的格式模板，颜色由 loguru 的 colorize 处理。"""

    color = color_of(level)
    return (
        f"<bold><white>{{extra[{HEAD_KEY}]}}</white>"
        f"<{color}> {{message}}{{extra[{ATTRS_TEXT_KEY}]}}</{color}></bold>\n"
    )


def write_line(line: str, stream: Optional[TextIO] = None) -> Optional[Exception]:
    """一次写出整行并 flush。

    默认写到调用时的 ``sys.stderr``。写入失败时返回异常对象，不重试也不抛出。
    """

    if stream is None:
        stream = sys.stderr
    try:
        stream.write(line)
        stream.flush()
    except (OSError, ValueError) as exc:
        # ValueError：流已关闭
        return exc
    return None


__all__ = [
    "BAD_KEY",
    "HEAD_KEY",
    "ATTRS_TEXT_KEY",
    "collect_attrs",
    "render_attrs",
    "display_site",
    "format_head",
    "line_template",
    "write_line",
]
