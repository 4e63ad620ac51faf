"""logx 的进程内配置。"""

from .settings import LogSettings, PathMode, get_settings

__all__ = ["LogSettings", "PathMode", "get_settings"]
