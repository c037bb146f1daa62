from typing import Tuple

from .models import AdjustmentRule, FestivalCategory, FestivalRule, SolarTermDefinition

_S = FestivalCategory.SOLAR
_L = FestivalCategory.LUNAR
_W = FestivalCategory.WESTERN
_WC = FestivalCategory.WESTERN_COMPUTED

NEW_YEAR_EVE = "除夕"

# ------------------ 节日规则表 ------------------
FESTIVAL_RULES: Tuple[FestivalRule, ...] = (
    # 公历固定
    FestivalRule(name="元旦", category=_S, date="01-01"),
    FestivalRule(name="妇女节", category=_S, date="03-08"),
    FestivalRule(name="植树节", category=_S, date="03-12"),
    FestivalRule(name="劳动节", category=_S, date="05-01"),
    FestivalRule(name="青年节", category=_S, date="05-04"),
    FestivalRule(name="儿童节", category=_S, date="06-01"),
    FestivalRule(name="建党节", category=_S, date="07-01"),
    FestivalRule(name="建军节", category=_S, date="08-01"),
    FestivalRule(name="教师节", category=_S, date="09-10"),
    FestivalRule(name="国庆节", category=_S, date="10-01"),

    # 农历固定，月日均为农历
    FestivalRule(name="春节", category=_L, date="01-01"),
    FestivalRule(name="元宵节", category=_L, date="01-15"),
    FestivalRule(name="龙抬头", category=_L, date="02-02"),
    FestivalRule(name="上巳节", category=_L, date="03-03"),
    FestivalRule(name="端午节", category=_L, date="05-05"),
    FestivalRule(name="七夕节", category=_L, date="07-07"),
    FestivalRule(name="中元节", category=_L, date="07-15"),
    FestivalRule(name="中秋节", category=_L, date="08-15"),
    FestivalRule(name="重阳节", category=_L, date="09-09"),
    FestivalRule(name="寒衣节", category=_L, date="10-01"),
    FestivalRule(name="下元节", category=_L, date="10-15"),
    FestivalRule(name="腊八节", category=_L, date="12-08"),
    FestivalRule(name="小年", category=_L, date="12-23"),
    FestivalRule(name=NEW_YEAR_EVE, category=_L, formula="new_year_eve"),  # 腊月廿九或三十

    # 西方固定
    FestivalRule(name="情人节", category=_W, date="02-14"),
    FestivalRule(name="愚人节", category=_W, date="04-01"),
    FestivalRule(name="万圣节", category=_W, date="10-31"),
    FestivalRule(name="圣诞节", category=_W, date="12-25"),

    # 西方推算，顺序即匹配顺序
    FestivalRule(name="复活节", category=_WC, formula="easter"),
    FestivalRule(name="母亲节", category=_WC, formula="05-second-sunday"),
    FestivalRule(name="父亲节", category=_WC, formula="06-third-sunday"),
    FestivalRule(name="感恩节", category=_WC, formula="11-fourth-thursday"),
)

# 从立春开始，每 15 度一个节气
SOLAR_TERMS: Tuple[SolarTermDefinition, ...] = tuple(
    SolarTermDefinition(name=name, longitude=(315 + 15 * i) % 360, order=i + 1)
    for i, name in enumerate((
        "立春", "雨水", "惊蛰", "春分", "清明", "谷雨",
        "立夏", "小满", "芒种", "夏至", "小暑", "大暑",
        "立秋", "处暑", "白露", "秋分", "寒露", "霜降",
        "立冬", "小雪", "大雪", "冬至", "小寒", "大寒",
    ))
)

SOLAR_TERM_NAMES: Tuple[str, ...] = tuple(t.name for t in SOLAR_TERMS)


def _days(*days: str) -> Tuple[str, ...]:
    return tuple(days)


# ------------------ 调休规则表 ------------------
# 国务院办公厅发布的放假安排，跨年的日期只记在所属年份
ADJUSTMENT_RULES: Tuple[AdjustmentRule, ...] = (
    AdjustmentRule(
        year=2023, holiday="元旦",
        holiday_dates=_days("2023-01-01", "2023-01-02"),
    ),
    AdjustmentRule(
        year=2023, holiday="春节",
        holiday_dates=_days("2023-01-21", "2023-01-22", "2023-01-23", "2023-01-24",
                            "2023-01-25", "2023-01-26", "2023-01-27"),
        working_dates=_days("2023-01-28", "2023-01-29"),
    ),
    AdjustmentRule(
        year=2023, holiday="清明节",
        holiday_dates=_days("2023-04-05"),
    ),
    AdjustmentRule(
        year=2023, holiday="劳动节",
        holiday_dates=_days("2023-04-29", "2023-04-30", "2023-05-01", "2023-05-02", "2023-05-03"),
        working_dates=_days("2023-04-23", "2023-05-06"),
    ),
    AdjustmentRule(
        year=2023, holiday="端午节",
        holiday_dates=_days("2023-06-22", "2023-06-23", "2023-06-24"),
        working_dates=_days("2023-06-25"),
    ),
    AdjustmentRule(
        year=2023, holiday="中秋节、国庆节",
        holiday_dates=_days("2023-09-29", "2023-09-30", "2023-10-01", "2023-10-02",
                            "2023-10-03", "2023-10-04", "2023-10-05", "2023-10-06"),
        working_dates=_days("2023-10-07", "2023-10-08"),
    ),
    AdjustmentRule(
        year=2024, holiday="元旦",
        holiday_dates=_days("2024-01-01"),
    ),
    AdjustmentRule(
        year=2024, holiday="春节",
        holiday_dates=_days("2024-02-10", "2024-02-11", "2024-02-12", "2024-02-13",
                            "2024-02-14", "2024-02-15", "2024-02-16", "2024-02-17"),
        working_dates=_days("2024-02-04", "2024-02-18"),
    ),
    AdjustmentRule(
        year=2024, holiday="清明节",
        holiday_dates=_days("2024-04-04", "2024-04-05", "2024-04-06"),
        working_dates=_days("2024-04-07"),
    ),
    AdjustmentRule(
        year=2024, holiday="劳动节",
        holiday_dates=_days("2024-05-01", "2024-05-02", "2024-05-03", "2024-05-04", "2024-05-05"),
        working_dates=_days("2024-04-28", "2024-05-11"),
    ),
    AdjustmentRule(
        year=2024, holiday="端午节",
        holiday_dates=_days("2024-06-08", "2024-06-09", "2024-06-10"),
    ),
    AdjustmentRule(
        year=2024, holiday="中秋节",
        holiday_dates=_days("2024-09-15", "2024-09-16", "2024-09-17"),
        working_dates=_days("2024-09-14"),
    ),
    AdjustmentRule(
        year=2024, holiday="国庆节",
        holiday_dates=_days("2024-10-01", "2024-10-02", "2024-10-03", "2024-10-04",
                            "2024-10-05", "2024-10-06", "2024-10-07"),
        working_dates=_days("2024-09-29", "2024-10-12"),
    ),
)
