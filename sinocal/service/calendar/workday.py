from datetime import date as dt, timedelta
from typing import List, Optional, Sequence

from .date_utils import date_range, format_date_string, is_weekday, is_weekend
from .models import ADJUSTED, RESTDAY, WORKDAY, AdjustmentRule, DayTypeResult
from .rules import ADJUSTMENT_RULES


class WorkdayResolver:
    def __init__(self, rules: Optional[Sequence[AdjustmentRule]] = None):
        self.rules = tuple(ADJUSTMENT_RULES if rules is None else rules)

    def year_rules(self, year: int) -> List[AdjustmentRule]:
        return [r for r in self.rules if r.year == year]

    def day_type(self, date: dt) -> DayTypeResult:
        """判断工作日/休息日，以及是否因调休而改变"""
        date_str = format_date_string(date)
        rules = self.year_rules(date.year)

        # 放假安排优先，多条规则撞同一天时按表中顺序取第一条
        for rule in rules:
            if date_str in rule.holiday_dates:
                if is_weekday(date):
                    return DayTypeResult(day_type=RESTDAY, adjusted=ADJUSTED)
                return DayTypeResult(day_type=RESTDAY)

        for rule in rules:
            if date_str in rule.working_dates:
                if is_weekend(date):
                    return DayTypeResult(day_type=WORKDAY, adjusted=ADJUSTED)
                return DayTypeResult(day_type=WORKDAY)

        if is_weekend(date):
            return DayTypeResult(day_type=RESTDAY)
        return DayTypeResult(day_type=WORKDAY)

    def is_workday(self, date: dt) -> bool:
        return self.day_type(date).day_type == WORKDAY

    def is_holiday(self, date: dt) -> bool:
        return self.day_type(date).day_type == RESTDAY

    def is_adjusted(self, date: dt) -> bool:
        return self.day_type(date).adjusted == ADJUSTED

    def year_holidays(self, year: int) -> List[str]:
        holidays = []
        for rule in self.year_rules(year):
            holidays.extend(rule.holiday_dates)
        return sorted(holidays)

    def year_working_days(self, year: int) -> List[str]:
        working_days = []
        for rule in self.year_rules(year):
            working_days.extend(rule.working_dates)
        return sorted(working_days)

    def holiday_adjustment(self, year: int, holiday: str) -> Optional[AdjustmentRule]:
        for rule in self.rules:
            if rule.year == year and rule.holiday == holiday:
                return rule
        return None

    def count_workdays(self, start: dt, end: dt) -> int:
        return sum(1 for day in date_range(start, end) if self.is_workday(day))

    def count_rest_days(self, start: dt, end: dt) -> int:
        return sum(1 for day in date_range(start, end) if self.is_holiday(day))

    # 没有步数上限，依赖调休表里总能找到工作日
    def next_workday(self, date: dt) -> dt:
        day = date + timedelta(days=1)
        while not self.is_workday(day):
            day += timedelta(days=1)
        return day

    def previous_workday(self, date: dt) -> dt:
        day = date - timedelta(days=1)
        while not self.is_workday(day):
            day -= timedelta(days=1)
        return day
