from datetime import date as dt, timedelta
from typing import Any, Callable, List, Optional

from sinocal.infra.config.settings import settings
from sinocal.infra.logger import logger

from .converter import LunarConverter, converter as default_converter
from .date_utils import date_range, format_chinese_date, format_chinese_week, is_weekend, iter_month, validate_range
from .festival import FestivalResolver
from .models import (
    LUNAR_FAILURE,
    WORKDAY,
    DateRecord,
    DateStatistics,
    DateStatisticsRecord,
    DayTypeResult,
    FestivalEntry,
    FieldResult,
    SolarTermEntry,
    SurroundingInfo,
)
from .solar_term import SolarTermResolver
from .workday import WorkdayResolver

UNKNOWN_DATE = "未知日期"
UNKNOWN_WEEK = "未知"


def _resolve_field(field: str, func: Callable[[], Any]) -> FieldResult:
    try:
        return FieldResult(field=field, success=True, value=func())
    except Exception as e:
        return FieldResult(field=field, success=False, error=f"{type(e).__name__}: {e}")


class DateAggregator:
    def __init__(
        self,
        lunar_converter: Optional[LunarConverter] = None,
        festival: Optional[FestivalResolver] = None,
        solar_term: Optional[SolarTermResolver] = None,
        workday: Optional[WorkdayResolver] = None,
    ):
        self.converter = lunar_converter or default_converter
        self.festival = festival or FestivalResolver(self.converter)
        self.solar_term = solar_term or SolarTermResolver(self.converter)
        self.workday = workday or WorkdayResolver()

    @staticmethod
    def _value_or(result: FieldResult, default: Any, date: Any) -> Any:
        if result.success:
            return result.value
        logger.warn("DateAggregator", f"{date} 的 {result.field} 获取失败: {result.error}")
        return default

    def compose(self, date: dt) -> DateRecord:
        """单个日期的完整信息，任一字段失败只影响该字段，不会抛异常"""
        results = {
            "date": _resolve_field("date", lambda: format_chinese_date(date)),
            "week": _resolve_field("week", lambda: format_chinese_week(date)),
            "lunar_date": _resolve_field("lunar_date", lambda: self.converter.lunar_label(date)),
            "festival": _resolve_field("festival", lambda: self.festival.resolve(date)),
            "solar_term": _resolve_field("solar_term", lambda: self.solar_term.term_of_day(date)),
            "day_type": _resolve_field("day_type", lambda: self.workday.day_type(date)),
        }
        day_type: DayTypeResult = self._value_or(results["day_type"], DayTypeResult(day_type=WORKDAY), date)
        return DateRecord(
            date=self._value_or(results["date"], UNKNOWN_DATE, date),
            week=self._value_or(results["week"], UNKNOWN_WEEK, date),
            day_type=day_type.day_type,
            adjusted=day_type.adjusted,
            festival=self._value_or(results["festival"], None, date),
            solar_term=self._value_or(results["solar_term"], None, date),
            lunar_date=self._value_or(results["lunar_date"], LUNAR_FAILURE, date),
        )

    def statistics(self, date: dt) -> DateStatisticsRecord:
        record = self.compose(date)
        year_holidays = self.workday.year_holidays(date.year)
        year_working_days = self.workday.year_working_days(date.year)
        leap = _resolve_field("is_leap_month", lambda: self.converter.to_lunar(date).is_leap_month)
        stats = DateStatistics(
            is_workday=self.workday.is_workday(date),
            is_holiday=self.workday.is_holiday(date),
            is_adjusted=self.workday.is_adjusted(date),
            is_weekend=is_weekend(date),
            is_solar_term=record.solar_term is not None,
            is_leap_month=self._value_or(leap, False, date),
            year_holidays_count=len(year_holidays),
            year_working_days_count=len(year_working_days),
        )
        return DateStatisticsRecord(**record.model_dump(), statistics=stats)

    def range_info(self, start: dt, end: dt) -> List[DateRecord]:
        validate_range(start, end)
        return [self.compose(day) for day in date_range(start, end)]

    def surrounding_info(self, center: dt, days: Optional[int] = None) -> SurroundingInfo:
        if days is None:
            days = settings.SURROUNDING_DAYS
        records = self.range_info(center - timedelta(days=days), center + timedelta(days=days))
        return SurroundingInfo(
            center_date=self.compose(center),
            surrounding_dates=[r for r in records if r.noteworthy],
            total_days=len(records),
        )

    def month_festivals(self, year: int, month: int) -> List[FestivalEntry]:
        entries = []
        for day in iter_month(year, month):
            name = self.festival.resolve(day)
            if name:
                entries.append(FestivalEntry(date=format_chinese_date(day), festival=name))
        return entries

    def year_solar_terms(self, year: int) -> List[SolarTermEntry]:
        terms = sorted(self.solar_term.year_terms(year).items(), key=lambda item: item[1])
        return [SolarTermEntry(name=name, date=format_chinese_date(day)) for name, day in terms]
