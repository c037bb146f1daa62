"""
反向查询：由农历日期、节日名、节气名找公历日期，以及按类别筛选日期范围。

全部是逐日穷举，单年最多 366 次，代价与查询的年份数成正比。
"""

import re
from datetime import date as dt
from typing import Callable, Dict, Iterable, List, Optional

from sinocal.infra.config.settings import settings
from sinocal.infra.logger import logger

from .aggregator import DateAggregator
from .converter import LunarConverter
from .date_utils import date_range, format_date_string, iter_year, validate_range
from .models import RESTDAY, WORKDAY, DateRecord, LunarQuery
from .rules import SOLAR_TERM_NAMES

LUNAR_TEXT_PATTERN = re.compile(
    r"农历(\d{4})年(闰?)([正一二三四五六七八九十冬腊]+)月([初一二三四五六七八九十廿]+)"
)

LUNAR_MONTHS: Dict[str, int] = {
    "正": 1, "一": 1, "二": 2, "三": 3, "四": 4, "五": 5, "六": 6,
    "七": 7, "八": 8, "九": 9, "十": 10, "冬": 11, "十一": 11, "腊": 12, "十二": 12,
}

LUNAR_DAYS: Dict[str, int] = {
    "初一": 1, "初二": 2, "初三": 3, "初四": 4, "初五": 5,
    "初六": 6, "初七": 7, "初八": 8, "初九": 9, "初十": 10,
    "十一": 11, "十二": 12, "十三": 13, "十四": 14, "十五": 15,
    "十六": 16, "十七": 17, "十八": 18, "十九": 19, "二十": 20,
    "廿一": 21, "廿二": 22, "廿三": 23, "廿四": 24, "廿五": 25,
    "廿六": 26, "廿七": 27, "廿八": 28, "廿九": 29, "三十": 30,
}

# 周末、节假日是早期数据里用过的休息日标签
REST_LABELS = (RESTDAY, "周末", "节假日")


def is_rest_day(record: DateRecord) -> bool:
    return record.day_type in REST_LABELS and not record.shifted_to_workday


def is_work_day(record: DateRecord) -> bool:
    # 调休上班的标记优先于 dayType 本身
    return record.day_type == WORKDAY or record.shifted_to_workday


CATEGORY_FILTERS: Dict[str, Callable[[DateRecord], bool]] = {
    "rest_days": is_rest_day,
    "work_days": is_work_day,
    "festivals": lambda r: r.festival is not None,
    "solar_terms": lambda r: r.solar_term is not None,
}


class ReverseQueryEngine:
    def __init__(self, aggregator: Optional[DateAggregator] = None):
        self.aggregator = aggregator or DateAggregator()

    @property
    def converter(self) -> LunarConverter:
        return self.aggregator.converter

    @staticmethod
    def parse_lunar_text(text: str) -> Optional[LunarQuery]:
        """解析“农历2025年正月初一”这类文本，解析不了返回 None"""
        if not isinstance(text, str) or not text:
            return None
        match = LUNAR_TEXT_PATTERN.search(text)
        if not match:
            return None
        month = LUNAR_MONTHS.get(match.group(3))
        day = LUNAR_DAYS.get(match.group(4))
        if month is None or day is None:
            return None
        return LunarQuery(year=int(match.group(1)), month=month, day=day, is_leap=match.group(2) == "闰")

    def find_matches_for_lunar(
        self, lunar_year: int, lunar_month: int, lunar_day: int, search_year: int, is_leap: bool = False
    ) -> List[str]:
        """在 search_year 这一公历年里找农历月日（含闰月标记）一致的日期"""
        matches = []
        for month in range(12):
            for day in range(1, 32):
                try:
                    candidate = dt(search_year, month + 1, day)
                except ValueError:
                    continue
                try:
                    lunar = self.converter.to_lunar(candidate)
                except Exception as e:
                    logger.debug("ReverseQuery", f"{candidate.isoformat()} 农历转换失败，跳过: {e}")
                    continue
                if (
                    lunar.raw_month == lunar_month
                    and lunar.raw_day == lunar_day
                    and lunar.is_leap_month == is_leap
                ):
                    matches.append(format_date_string(candidate))
        return matches

    def _compose_sorted(self, dates: Iterable[dt]) -> List[DateRecord]:
        return [self.aggregator.compose(day) for day in sorted(dates)]

    def _lunar_matches(self, query: LunarQuery, years: Iterable[int]) -> List[dt]:
        found = []
        for year in years:
            for date_str in self.find_matches_for_lunar(query.year, query.month, query.day, year, query.is_leap):
                found.append(dt.fromisoformat(date_str))
        return found

    def _lunar_year_of(self, date: dt) -> Optional[int]:
        try:
            return self.converter.to_lunar(date).lunar_year
        except Exception as e:
            logger.debug("ReverseQuery", f"{date.isoformat()} 农历年份获取失败，跳过: {e}")
            return None

    def query_lunar_date(self, text: str, years: Iterable[int]) -> List[DateRecord]:
        query = self.parse_lunar_text(text)
        if query is None:
            return []
        return self._compose_sorted(self._lunar_matches(query, years))

    def query_lunar_year(self, text: str) -> List[DateRecord]:
        """按文本里写的农历年查找，腊月、冬月等可能落在下一个公历年"""
        query = self.parse_lunar_text(text)
        if query is None:
            return []
        years = range(query.year, min(query.year + 1, settings.MAX_YEAR) + 1)
        found = [day for day in self._lunar_matches(query, years) if self._lunar_year_of(day) == query.year]
        return self._compose_sorted(found)

    def year_festivals(self, year: int) -> List[tuple]:
        festivals = []
        for day in iter_year(year):
            try:
                name = self.aggregator.festival.resolve(day)
            except Exception as e:
                logger.debug("ReverseQuery", f"{day.isoformat()} 节日判断失败，跳过: {e}")
                continue
            if name:
                festivals.append((name, day))
        return festivals

    def query_festival(self, name: str, years: Iterable[int]) -> List[DateRecord]:
        """名称互相包含即算命中，短名称可能匹配到多个节日"""
        if not name:
            return []
        found = []
        for year in years:
            for festival, day in self.year_festivals(year):
                if name in festival or festival in name:
                    found.append(day)
        return self._compose_sorted(found)

    def query_solar_term(self, name: str, years: Iterable[int]) -> List[DateRecord]:
        if name not in SOLAR_TERM_NAMES:
            return []
        found = []
        for year in years:
            for term, day in self.aggregator.solar_term.year_terms(year).items():
                if term == name:
                    found.append(day)
        return self._compose_sorted(found)

    def query_by_date_range(self, start: dt, end: dt, category: str) -> List[DateRecord]:
        validate_range(start, end)
        keep = CATEGORY_FILTERS.get(category)
        if keep is None:
            return []
        records = [self.aggregator.compose(day) for day in date_range(start, end)]
        return [r for r in records if keep(r)]

    is_rest_day = staticmethod(is_rest_day)
    is_work_day = staticmethod(is_work_day)
