"""loguru 的自定义处理器：等级门控 + 单行渲染。"""

from __future__ import annotations

from typing import Any, Mapping, Optional, TextIO

from logx.caller import UNKNOWN, CallSite
from logx.config.settings import LogSettings, PathMode, get_settings
from logx.formatter import (
    ATTRS_TEXT_KEY,
    HEAD_KEY,
    format_head,
    line_template,
    render_attrs,
    write_line,
)

# 写入 loguru record["extra"] 的私有键
CALL_SITE_KEY = "logx_call_site"
ATTRS_KEY = "logx_attrs"
HANDLER_KEY = "logx_handler"


class LogxHandler:
    """由 loguru 调用的处理器。

    - ``filter``：作为 ``logger.add(filter=...)`` 使用，只放行属于自己且已启用的记录
    - ``format``：作为 ``logger.add(format=...)`` 使用，返回带颜色标记的模板
    - ``sink``：作为 ``logger.add(sink)`` 使用，写出 loguru 渲染好的一行

    所有 logx 日志器共用 loguru 的同一个 core，记录通过 ``HANDLER_KEY`` 标明
    所属的处理器。没有该标记的记录（直接调用 ``loguru.logger``）只由
    ``catch_untagged=True`` 的处理器（进程级单例）输出。

    未显式传入 settings 时，每次调用都读取进程级的 ``get_settings()``。
    处理器本身不可变：``with_attrs``/``with_group`` 接受请求但直接返回自身。
    """

    def __init__(
        self,
        settings: Optional[LogSettings] = None,
        stream: Optional[TextIO] = None,
        *,
        catch_untagged: bool = False,
    ) -> None:
        self._settings = settings
        # None 表示写到调用时的 sys.stderr
        self.stream = stream
        self.catch_untagged = catch_untagged
        # loguru 返回的 sink id，安装后设置
        self.sink_id: Optional[int] = None

    @property
    def settings(self) -> LogSettings:
        if self._settings is not None:
            return self._settings
        return get_settings()

    def enabled(self, level: int) -> bool:
        return level >= self.settings.level

    def owns(self, record: Mapping[str, Any]) -> bool:
        owner = record["extra"].get(HANDLER_KEY)
        if owner is None:
            return self.catch_untagged
        return owner is self

    def filter(self, record: Mapping[str, Any]) -> bool:
        return self.owns(record) and self.enabled(record["level"].no)

    def with_attrs(self, attrs: Any) -> "LogxHandler":
        return self

    def with_group(self, name: str) -> "LogxHandler":
        return self

    def format(self, record: Mapping[str, Any]) -> str:
        """渲染时间、位置与属性文本，写入 record["extra"]，返回 loguru 模板。"""

        settings = self.settings
        extra = record["extra"]
        mode = settings.path_mode
        level = record["level"].no

        call_site: Optional[CallSite] = None
        if mode is not PathMode.ABSENT:
            if CALL_SITE_KEY in extra:
                call_site = extra[CALL_SITE_KEY] or UNKNOWN
            else:
                # 直接经由 loguru 发出的记录，使用 loguru 自己解析的位置
                call_site = CallSite(record["file"].path, record["line"])

        extra[HEAD_KEY] = format_head(record["time"], level, call_site, mode, settings.time_format)
        extra[ATTRS_TEXT_KEY] = render_attrs(extra.get(ATTRS_KEY, ()))
        return line_template(level)

    def sink(self, message: Any) -> Optional[Exception]:
        """写出一行，返回写入错误（成功时为 None）；loguru 会忽略返回值。"""
        return write_line(str(message), self.stream)


__all__ = ["LogxHandler", "CALL_SITE_KEY", "ATTRS_KEY", "HANDLER_KEY"]
