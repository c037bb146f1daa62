"""
Logger 单元测试

测试日志级别过滤，以及服务初始化时设置级别。
"""

from __future__ import annotations

import pytest

from sinocal.infra.logger import Logger, logger
from sinocal.service.calendar.aggregator import DateAggregator
from sinocal.service.calendar.service import CalendarService


@pytest.fixture
def restore_level():
    """测试结束后恢复原来的日志级别。"""
    original = Logger._current_level
    yield
    Logger._current_level = original


@pytest.mark.unit
class TestLogLevel:
    """测试按级别过滤输出。"""

    def test_lower_levels_are_hidden(self, capsys, restore_level) -> None:
        Logger.set_level("WARN")
        logger.info("Test", "普通信息")
        logger.warn("Test", "警告信息")
        err = capsys.readouterr().err
        assert "普通信息" not in err
        assert "[WARN] Test | 警告信息" in err

    def test_level_name_is_case_insensitive(self, capsys, restore_level) -> None:
        Logger.set_level("debug")
        logger.debug("Test", "调试信息")
        assert "[DEBUG] Test | 调试信息" in capsys.readouterr().err

    def test_unknown_level_falls_back_to_info(self, capsys, restore_level) -> None:
        Logger.set_level("verbose")
        logger.debug("Test", "调试信息")
        logger.info("Test", "普通信息")
        err = capsys.readouterr().err
        assert "调试信息" not in err
        assert "普通信息" in err

    def test_service_sets_level(self, fake_converter_factory, capsys, restore_level) -> None:
        CalendarService(DateAggregator(fake_converter_factory()), log_level="ERROR")
        logger.warn("Test", "警告信息")
        logger.error("Test", "错误信息")
        err = capsys.readouterr().err
        assert "警告信息" not in err
        assert "[ERROR] Test | 错误信息" in err
