"""
DateAggregator 单元测试

重点测试字段级降级：任一子查询失败时只影响对应字段，整体不抛异常。
"""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest

from sinocal.infra.errors import DateRangeError
from sinocal.service.calendar.aggregator import UNKNOWN_DATE, UNKNOWN_WEEK, DateAggregator
from sinocal.service.calendar.festival import FestivalResolver
from sinocal.service.calendar.models import LUNAR_FAILURE
from sinocal.service.calendar.solar_term import SolarTermResolver
from sinocal.service.calendar.workday import WorkdayResolver


def _broken(method: str) -> MagicMock:
    mock = MagicMock()
    getattr(mock, method).side_effect = RuntimeError("boom")
    return mock


@pytest.fixture
def fake_aggregator(fake_converter_factory) -> DateAggregator:
    converter = fake_converter_factory(
        lunar={date(2025, 1, 29): (1, 1, False), date(2020, 6, 1): (4, 10, True)},
        terms={date(2025, 2, 3): "立春"},
    )
    return DateAggregator(converter)


@pytest.mark.unit
class TestCompose:
    """测试单日信息组装。"""

    def test_all_fields(self, fake_aggregator: DateAggregator) -> None:
        record = fake_aggregator.compose(date(2025, 1, 29))
        assert record.date == "2025年1月29日"
        assert record.week == "星期三"
        assert record.festival == "春节"
        assert record.solar_term is None
        assert record.day_type == "工作日"
        assert record.lunar_date == "甲子年1月1"

    def test_solar_term_field(self, fake_aggregator: DateAggregator) -> None:
        assert fake_aggregator.compose(date(2025, 2, 3)).solar_term == "立春"

    def test_payload_uses_camel_case(self, fake_aggregator: DateAggregator) -> None:
        payload = fake_aggregator.compose(date(2025, 1, 29)).to_payload()
        assert payload["dayType"] == "工作日"
        assert payload["lunarDate"] == "甲子年1月1"
        assert "solarTerm" not in payload
        assert "adjusted" not in payload


@pytest.mark.unit
class TestFieldDegradation:
    """测试子查询失败时的默认值。"""

    def test_festival_failure(self, fake_converter_factory) -> None:
        aggregator = DateAggregator(fake_converter_factory(), festival=_broken("resolve"))
        record = aggregator.compose(date(2025, 1, 1))
        assert record.festival is None
        assert record.date == "2025年1月1日"

    def test_solar_term_failure(self, fake_converter_factory) -> None:
        aggregator = DateAggregator(fake_converter_factory(), solar_term=_broken("term_of_day"))
        record = aggregator.compose(date(2025, 2, 3))
        assert record.solar_term is None
        assert record.week == "星期一"

    def test_workday_failure_defaults_to_workday(self, fake_converter_factory) -> None:
        aggregator = DateAggregator(fake_converter_factory(), workday=_broken("day_type"))
        record = aggregator.compose(date(2025, 1, 4))
        assert record.day_type == "工作日"
        assert record.adjusted is None

    def test_lunar_failure_uses_sentinel(self, fake_converter_factory) -> None:
        day = date(2025, 12, 25)
        aggregator = DateAggregator(fake_converter_factory(failing=[day]))
        record = aggregator.compose(day)
        assert record.lunar_date == LUNAR_FAILURE
        assert record.festival == "圣诞节"
        assert record.solar_term is None

    def test_invalid_input_never_raises(self, fake_converter_factory) -> None:
        aggregator = DateAggregator(fake_converter_factory())
        record = aggregator.compose(None)  # type: ignore[arg-type]
        assert record.date == UNKNOWN_DATE
        assert record.week == UNKNOWN_WEEK
        assert record.day_type == "工作日"
        assert record.festival is None
        assert record.lunar_date == LUNAR_FAILURE

    def test_resolvers_are_injectable(self, fake_converter_factory) -> None:
        converter = fake_converter_factory()
        aggregator = DateAggregator(
            converter,
            festival=FestivalResolver(converter),
            solar_term=SolarTermResolver(converter),
            workday=WorkdayResolver([]),
        )
        assert aggregator.compose(date(2024, 2, 12)).day_type == "工作日"


@pytest.mark.unit
class TestStatistics:
    """测试统计信息。"""

    def test_adjusted_working_sunday(self, fake_aggregator: DateAggregator) -> None:
        record = fake_aggregator.statistics(date(2024, 2, 4))
        stats = record.statistics
        assert stats.is_workday
        assert not stats.is_holiday
        assert stats.is_adjusted
        assert stats.is_weekend
        assert not stats.is_leap_month
        assert stats.year_holidays_count == 30
        assert stats.year_working_days_count == 8

    def test_leap_month_and_solar_term(self, fake_converter_factory) -> None:
        day = date(2020, 6, 1)
        converter = fake_converter_factory(lunar={day: (4, 10, True)}, terms={day: "芒种"})
        stats = DateAggregator(converter).statistics(day).statistics
        assert stats.is_leap_month
        assert stats.is_solar_term

    def test_statistics_payload(self, fake_aggregator: DateAggregator) -> None:
        payload = fake_aggregator.statistics(date(2025, 1, 29)).to_payload()
        assert payload["festival"] == "春节"
        assert payload["statistics"]["yearHolidaysCount"] == 0


@pytest.mark.unit
class TestRanges:
    """测试范围、周边和按月按年汇总。"""

    def test_range_info(self, fake_aggregator: DateAggregator) -> None:
        records = fake_aggregator.range_info(date(2025, 1, 28), date(2025, 2, 3))
        assert len(records) == 7
        assert records[0].date == "2025年1月28日"
        assert records[-1].solar_term == "立春"

    def test_range_too_long(self, fake_aggregator: DateAggregator) -> None:
        with pytest.raises(DateRangeError):
            fake_aggregator.range_info(date(2023, 1, 1), date(2024, 1, 3))

    def test_range_reversed(self, fake_aggregator: DateAggregator) -> None:
        with pytest.raises(DateRangeError):
            fake_aggregator.range_info(date(2025, 2, 1), date(2025, 1, 1))

    def test_surrounding_info(self, fake_aggregator: DateAggregator) -> None:
        info = fake_aggregator.surrounding_info(date(2025, 1, 31), days=3)
        assert info.total_days == 7
        assert info.center_date.date == "2025年1月31日"
        assert [r.date for r in info.surrounding_dates] == ["2025年1月29日", "2025年2月3日"]

    def test_surrounding_default_window(self, fake_aggregator: DateAggregator) -> None:
        assert fake_aggregator.surrounding_info(date(2025, 6, 15)).total_days == 15

    def test_month_festivals(self, fake_aggregator: DateAggregator) -> None:
        entries = fake_aggregator.month_festivals(2025, 12)
        assert [(e.date, e.festival) for e in entries] == [("2025年12月25日", "圣诞节")]

    def test_year_solar_terms_sorted(self, fake_converter_factory) -> None:
        converter = fake_converter_factory(terms={date(2025, 12, 21): "冬至", date(2025, 2, 3): "立春"})
        entries = DateAggregator(converter).year_solar_terms(2025)
        assert [e.name for e in entries] == ["立春", "冬至"]
        assert entries[0].date == "2025年2月3日"
