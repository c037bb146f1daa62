"""公历与农历之间的转换，农历部分交给 zhdate，节气交给 chinese_calendar。"""

from datetime import date as dt, datetime, time
from typing import Optional

from chinese_calendar import get_solar_terms
from zhdate import ZhDate

from .models import LunarInfo

LUNAR_MONTH_NAMES = ("正", "二", "三", "四", "五", "六", "七", "八", "九", "十", "冬", "腊")
LUNAR_DAY_NAMES = (
    "初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
    "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
    "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十",
)
HEAVENLY_STEMS = "甲乙丙丁戊己庚辛壬癸"
EARTHLY_BRANCHES = "子丑寅卯辰巳午未申酉戌亥"

# zhdate 的数据从农历 1900 年正月初一开始
FIRST_SUPPORTED = dt(1900, 1, 31)
LAST_SUPPORTED_YEAR = 2100


def ganzhi(lunar_year: int) -> str:
    offset = lunar_year - 4
    return HEAVENLY_STEMS[offset % 10] + EARTHLY_BRANCHES[offset % 12]


class LunarConverter:
    @staticmethod
    def _check_supported(date: dt):
        if date < FIRST_SUPPORTED or date.year > LAST_SUPPORTED_YEAR:
            raise ValueError(f"超出农历转换支持范围: {date.isoformat()}")

    def to_lunar(self, date: dt) -> LunarInfo:
        self._check_supported(date)
        lunar = ZhDate.from_datetime(datetime.combine(date, time.min))
        return LunarInfo(
            lunar_year=lunar.lunar_year,
            year_label=ganzhi(lunar.lunar_year),
            month_label=LUNAR_MONTH_NAMES[lunar.lunar_month - 1],
            day_label=LUNAR_DAY_NAMES[lunar.lunar_day - 1],
            is_leap_month=bool(lunar.leap_month),
            raw_month=lunar.lunar_month,
            raw_day=lunar.lunar_day,
        )

    def lunar_label(self, date: dt) -> str:
        """如：乙巳年正月初一、庚子年闰四月初一"""
        info = self.to_lunar(date)
        month = f"闰{info.month_label}" if info.is_leap_month else info.month_label
        return f"{info.year_label}年{month}月{info.day_label}"

    @staticmethod
    def term_of_day(date: dt) -> Optional[str]:
        terms = get_solar_terms(date, date)
        if terms:
            return terms[0][1]
        return None

    @staticmethod
    def leap_month_of_year(lunar_year: int) -> int:
        """农历某年闰几月，没有闰月返回 0"""
        for month in range(1, 13):
            if ZhDate.validate(lunar_year, month, 1, True):
                return month
        return 0


converter = LunarConverter()
