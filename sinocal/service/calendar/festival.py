from datetime import date as dt, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from sinocal.infra.logger import logger

from .converter import LunarConverter, converter as default_converter
from .date_utils import easter, month_day_key, nth_weekday
from .models import FestivalCategory, FestivalRule
from .rules import FESTIVAL_RULES, NEW_YEAR_EVE

# 第 n 周星期 w：公式名 -> (月, 第几周, 星期)，星期 0=周一
WEEKDAY_OFFSET: Dict[str, Tuple[int, int, int]] = {
    "05-second-sunday": (5, 2, 6),  # 母亲节
    "06-third-sunday": (6, 3, 6),  # 父亲节
    "11-fourth-thursday": (11, 4, 3),  # 感恩节
}

# 匹配顺序，先命中者为准
TIER_ORDER: Tuple[FestivalCategory, ...] = (
    FestivalCategory.SOLAR,
    FestivalCategory.LUNAR,
    FestivalCategory.WESTERN,
    FestivalCategory.WESTERN_COMPUTED,
)


def _fixed_table(category: FestivalCategory) -> Dict[str, FestivalRule]:
    return {r.date: r for r in FESTIVAL_RULES if r.category == category and r.date}


class FestivalResolver:
    def __init__(self, lunar_converter: Optional[LunarConverter] = None):
        self.converter = lunar_converter or default_converter
        self._solar = _fixed_table(FestivalCategory.SOLAR)
        self._lunar = _fixed_table(FestivalCategory.LUNAR)
        self._western = _fixed_table(FestivalCategory.WESTERN)
        self._computed = [r for r in FESTIVAL_RULES if r.category == FestivalCategory.WESTERN_COMPUTED]
        self._by_name = {r.name: r for r in FESTIVAL_RULES}
        self._tiers: Dict[FestivalCategory, Callable[[dt], Optional[FestivalRule]]] = {
            FestivalCategory.SOLAR: self._match_solar,
            FestivalCategory.LUNAR: self._match_lunar,
            FestivalCategory.WESTERN: self._match_western,
            FestivalCategory.WESTERN_COMPUTED: self._match_computed,
        }

    def match(self, date: dt) -> Optional[FestivalRule]:
        for category in TIER_ORDER:
            rule = self._tiers[category](date)
            if rule is not None:
                return rule
        return None

    def resolve(self, date: dt) -> Optional[str]:
        """某天的节日名称，没有则返回 None"""
        rule = self.match(date)
        return rule.name if rule else None

    def _match_solar(self, date: dt) -> Optional[FestivalRule]:
        return self._solar.get(month_day_key(date.month, date.day))

    def _match_lunar(self, date: dt) -> Optional[FestivalRule]:
        try:
            lunar = self.converter.to_lunar(date)
            if lunar.raw_month == 12 and self.is_new_year_eve(date):
                return self._by_name[NEW_YEAR_EVE]
        except Exception as e:
            logger.warn("Festival", f"{date.isoformat()} 农历节日判断失败: {e}")
            return None
        if lunar.is_leap_month:
            return None
        return self._lunar.get(month_day_key(lunar.raw_month, lunar.raw_day))

    def _match_western(self, date: dt) -> Optional[FestivalRule]:
        return self._western.get(month_day_key(date.month, date.day))

    def _match_computed(self, date: dt) -> Optional[FestivalRule]:
        for rule in self._computed:
            if self._formula_matches(rule.formula, date):
                return rule
        return None

    @staticmethod
    def _formula_matches(formula: str, date: dt) -> bool:
        if formula == "easter":
            return (date.month, date.day) == easter(date.year)
        month, n, weekday = WEEKDAY_OFFSET[formula]
        return date.month == month and date.day == nth_weekday(date.year, month, n, weekday)

    def is_new_year_eve(self, date: dt) -> bool:
        """腊月且次日是正月初一，兼容腊月小（廿九）和腊月大（三十）"""
        lunar = self.converter.to_lunar(date)
        if lunar.raw_month != 12:
            return False
        try:
            tomorrow = self.converter.to_lunar(date + timedelta(days=1))
        except Exception as e:
            # 次日超出转换范围时按非除夕处理
            logger.debug("Festival", f"{date.isoformat()} 次日农历转换失败: {e}")
            return False
        return tomorrow.raw_month == 1 and tomorrow.raw_day == 1

    @staticmethod
    def all_festivals() -> List[FestivalRule]:
        return list(FESTIVAL_RULES)

    @staticmethod
    def festivals_by_category(category: FestivalCategory) -> List[FestivalRule]:
        return [r for r in FESTIVAL_RULES if r.category == category]

    def festivals_by_date(self, date: dt) -> List[FestivalRule]:
        rule = self.match(date)
        return [rule] if rule else []
