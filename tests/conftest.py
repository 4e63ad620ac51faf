"""测试公共夹具。"""

import pytest
from loguru import logger as loguru_logger

import logx.logger as logx_logger
from logx.config.settings import get_settings
from logx.handler import LogxHandler


@pytest.fixture(autouse=True)
def reset_logx(monkeypatch):
    """每个测试使用全新的单例、默认配置，并在结束后移除 loguru sink。"""
    monkeypatch.setattr(logx_logger, "_LOGGER", None)
    get_settings(force_reload=True)
    yield
    loguru_logger.remove()
    get_settings(force_reload=True)


@pytest.fixture
def plain_output(monkeypatch):
    """让进程级单例以不带颜色的方式安装，便于断言输出文本。"""

    def build_plain():
        return logx_logger.Logger(LogxHandler(catch_untagged=True), colorize=False)

    monkeypatch.setattr(logx_logger, "_build_logger", build_plain)
