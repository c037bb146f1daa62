"""
测试共享 Fixtures

提供农历转换的替身、各解析器实例和 DateRecord 工厂。
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Tuple

import pytest

from sinocal.service.calendar.aggregator import DateAggregator
from sinocal.service.calendar.converter import LunarConverter
from sinocal.service.calendar.festival import FestivalResolver
from sinocal.service.calendar.models import DateRecord, LunarInfo
from sinocal.service.calendar.reverse_query import ReverseQueryEngine
from sinocal.service.calendar.service import CalendarService
from sinocal.service.calendar.solar_term import SolarTermResolver
from sinocal.service.calendar.workday import WorkdayResolver

# ═══════════════════════════════════════════════════════════
# 农历转换替身
# ═══════════════════════════════════════════════════════════


class FakeConverter(LunarConverter):
    """按表返回农历月日和节气，未登记的日期视为农历三月初四

    农历表的值为 (月, 日, 闰月) 或 (月, 日, 闰月, 农历年)，缺省农历年取公历年。
    """

    def __init__(
        self,
        lunar: Optional[Dict[date, tuple]] = None,
        terms: Optional[Dict[date, str]] = None,
        failing: Tuple[date, ...] = (),
    ):
        self.lunar = lunar or {}
        self.terms = terms or {}
        self.failing = set(failing)

    def to_lunar(self, day: date) -> LunarInfo:
        if day in self.failing:
            raise ValueError(f"无法转换 {day}")
        entry = self.lunar.get(day, (3, 4, False))
        month, lunar_day, leap = entry[:3]
        return LunarInfo(
            lunar_year=entry[3] if len(entry) > 3 else day.year,
            year_label="甲子",
            month_label=str(month),
            day_label=str(lunar_day),
            is_leap_month=leap,
            raw_month=month,
            raw_day=lunar_day,
        )

    def term_of_day(self, day: date) -> Optional[str]:
        if day in self.failing:
            raise ValueError(f"无法获取节气 {day}")
        return self.terms.get(day)


@pytest.fixture
def fake_converter_factory():
    """工厂函数：按需构造 FakeConverter。"""

    def _create(lunar=None, terms=None, failing=()):
        return FakeConverter(lunar=lunar, terms=terms, failing=tuple(failing))

    return _create


# ═══════════════════════════════════════════════════════════
# 真实数据 Fixtures
# ═══════════════════════════════════════════════════════════


@pytest.fixture(scope="session")
def calendar_service() -> CalendarService:
    """使用真实 zhdate / chinese_calendar 数据的服务。"""
    return CalendarService()


@pytest.fixture(scope="session")
def aggregator(calendar_service: CalendarService) -> DateAggregator:
    return calendar_service.aggregator


@pytest.fixture(scope="session")
def festival_resolver() -> FestivalResolver:
    return FestivalResolver()


@pytest.fixture(scope="session")
def solar_term_resolver() -> SolarTermResolver:
    return SolarTermResolver()


@pytest.fixture
def workday_resolver() -> WorkdayResolver:
    return WorkdayResolver()


@pytest.fixture(scope="session")
def reverse_engine(calendar_service: CalendarService) -> ReverseQueryEngine:
    return calendar_service.reverse


# ═══════════════════════════════════════════════════════════
# DateRecord 工厂
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def make_record():
    """工厂函数：构造 DateRecord。"""

    def _create(day_type: str = "工作日", adjusted: Optional[str] = None, **kwargs) -> DateRecord:
        fields = {
            "date": "2025年2月8日",
            "week": "星期六",
            "lunar_date": "乙巳年正月十一",
        }
        fields.update(kwargs)
        return DateRecord(day_type=day_type, adjusted=adjusted, **fields)

    return _create
