"""进程级日志配置（基于 pydantic）。

只在进程内生效：不读取配置文件，也不读取环境变量，重启后恢复默认值。
应在并发写日志开始之前（通常是启动阶段）完成配置；运行期间并发修改配置
不受支持，读写之间没有额外的加锁。
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from logx.levels import Level


class PathMode(str, Enum):
    """调用位置的显示方式。"""

    ABSENT = "absent"  # 不显示 [file:line]
    FULL = "full"  # 保留捕获到的完整路径
    SHORT = "short"  # 只保留文件名


class LogSettings(BaseModel):
    """日志配置模型，赋值时同样会校验。

    Examples:
        >>> settings = LogSettings(level="warn", path_mode="full")
        >>> settings.level
        <Level.WARN: 30>
    """

    model_config = ConfigDict(validate_assignment=True)

    # 最低输出等级
    level: Level = Field(default=Level.DEBUG, description="低于该等级的日志不会输出")

    path_mode: PathMode = Field(default=PathMode.SHORT, description="调用位置的显示方式")

    time_format: str = Field(default="%H:%M:%S", description="时间戳的 strftime 格式")

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> Level:
        """接受 Level、整数或大小写不敏感的等级名称。"""
        return Level.parse(v)

    @field_validator("path_mode", mode="before")
    @classmethod
    def validate_path_mode(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, PathMode):
            return v.strip().lower()
        return v

    @field_validator("time_format")
    @classmethod
    def validate_time_format(cls, v: str) -> str:
        if not v:
            raise ValueError("time_format 不能为空")
        return v


# module-level cached settings
_SETTINGS: Optional[LogSettings] = None
_LOCK = threading.Lock()


def get_settings(force_reload: bool = False) -> LogSettings:
    """返回全局 LogSettings 单例（首次调用时创建）。

    如果 force_reload=True，会重新创建一个默认配置的实例。
    """

    global _SETTINGS
    if _SETTINGS is None or force_reload:
        with _LOCK:
            if _SETTINGS is None or force_reload:
                _SETTINGS = LogSettings()
    return _SETTINGS


__all__ = ["PathMode", "LogSettings", "get_settings"]
