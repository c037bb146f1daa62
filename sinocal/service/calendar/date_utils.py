import calendar
from datetime import date as dt, datetime, timedelta
from typing import Iterator, List, Optional, Tuple

from sinocal.infra.config.settings import settings
from sinocal.infra.errors import DateParseError, DateRangeError

WEEKDAYS_CN = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")


def is_weekend(date: dt) -> bool:
    return date.weekday() >= 5


def is_weekday(date: dt) -> bool:
    return not is_weekend(date)


def nth_weekday(year: int, month: int, n: int, weekday: int) -> int:
    """某月第 n 个星期 weekday（0=周一 … 6=周日）是几号"""
    first = dt(year, month, 1)
    days_ahead = (weekday - first.weekday() + 7) % 7
    return 1 + days_ahead + (n - 1) * 7


def easter(year: int) -> Tuple[int, int]:
    """匿名格里高利历算法，返回复活节的 (月, 日)"""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return month, day


def month_day_key(month: int, day: int) -> str:
    return f"{month:02d}-{day:02d}"


def format_chinese_date(date: dt) -> str:
    return f"{date.year}年{date.month}月{date.day}日"


def format_chinese_week(date: dt) -> str:
    return WEEKDAYS_CN[date.weekday()]


def format_date_string(date: dt) -> str:
    return date.strftime("%Y-%m-%d")


def parse_date(date_str: str) -> dt:
    """解析 YYYY-MM-DD，格式不对或日期不存在时抛 DateParseError"""
    try:
        parsed = datetime.strptime(date_str.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as e:
        raise DateParseError(f"无法解析日期: {date_str}") from e
    # strptime 接受 2025-1-1 这种写法，这里要求往返一致
    if format_date_string(parsed) != date_str.strip():
        raise DateParseError(f"日期格式无效，请使用YYYY-MM-DD格式: {date_str}")
    return parsed


def validate_range(start: dt, end: dt, max_days: Optional[int] = None) -> None:
    if max_days is None:
        max_days = settings.MAX_RANGE_DAYS
    if start > end:
        raise DateRangeError("开始日期不能晚于结束日期")
    if (end - start).days > max_days:
        raise DateRangeError(f"查询范围不能超过{max_days}天")


def date_range(start: dt, end: dt) -> List[dt]:
    """[start, end] 闭区间内的每一天"""
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days


def iter_year(year: int) -> Iterator[dt]:
    """按顺序遍历一年中的每一天"""
    for month in range(1, 13):
        yield from iter_month(year, month)


def iter_month(year: int, month: int) -> Iterator[dt]:
    for day in range(1, calendar.monthrange(year, month)[1] + 1):
        yield dt(year, month, day)
