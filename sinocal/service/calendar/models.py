from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

WORKDAY = "工作日"
RESTDAY = "休息日"
ADJUSTED = "调休"
ADJUSTED_TO_WORKDAY = "调休工作日"
LUNAR_FAILURE = "农历信息获取失败"

DayType = Literal["工作日", "休息日"]


class FestivalCategory(str, Enum):
    SOLAR = "solar"  # 公历固定
    LUNAR = "lunar"  # 农历固定
    WESTERN = "western"  # 西方固定
    WESTERN_COMPUTED = "western_computed"  # 西方按公式推算


class FestivalRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: FestivalCategory
    date: Optional[str] = None  # "MM-DD"，公历或农历
    formula: Optional[str] = None  # 推算型节日的公式名


class SolarTermDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    longitude: int  # 太阳黄经
    order: int


class AdjustmentRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    holiday: str
    holiday_dates: Tuple[str, ...] = ()  # 放假日期
    working_dates: Tuple[str, ...] = ()  # 调休上班日期


class LunarInfo(BaseModel):
    lunar_year: int
    year_label: str  # 干支，如 乙巳
    month_label: str  # 正、二 … 冬、腊
    day_label: str  # 初一 … 三十
    is_leap_month: bool = False
    raw_month: int
    raw_day: int


class LunarQuery(BaseModel):
    year: int
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=30)
    is_leap: bool = False


class DayTypeResult(BaseModel):
    day_type: DayType = WORKDAY
    adjusted: Optional[str] = None


class DateRecord(BaseModel):
    """单个日期的完整信息"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str  # 中文日期，如 2025年1月1日
    week: str  # 星期五
    day_type: str = WORKDAY
    adjusted: Optional[str] = None
    festival: Optional[str] = None
    solar_term: Optional[str] = None
    lunar_date: str = LUNAR_FAILURE

    @property
    def shifted_to_workday(self) -> bool:
        if self.adjusted == ADJUSTED_TO_WORKDAY:
            return True
        return self.adjusted == ADJUSTED and self.day_type == WORKDAY

    @property
    def noteworthy(self) -> bool:
        return bool(self.festival or self.solar_term or self.adjusted)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class DateStatistics(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_workday: bool = True
    is_holiday: bool = False
    is_adjusted: bool = False
    is_weekend: bool = False
    is_solar_term: bool = False
    is_leap_month: bool = False
    year_holidays_count: int = 0
    year_working_days_count: int = 0


class DateStatisticsRecord(DateRecord):
    statistics: DateStatistics


class FestivalEntry(BaseModel):
    date: str
    festival: str


class SolarTermEntry(BaseModel):
    name: str
    date: str


class SurroundingInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    center_date: DateRecord
    surrounding_dates: List[DateRecord] = Field(default_factory=list)
    total_days: int = 0


class FieldResult(BaseModel):
    """单个字段的解析结果，成功时带值，失败时带错误信息"""
    field: str
    success: bool
    value: Any = None
    error: Optional[str] = None


class Operation(BaseModel):
    """对外暴露的操作，描述名称、参数和实现函数"""
    name: str = Field(..., description="操作名称，必须唯一")
    description: str = Field(..., description="操作功能描述")
    parameters: Dict[str, Any] = Field(..., description="参数的JSON Schema定义")
    func: Callable[..., Any] = Field(..., description="操作对应的实现函数")

    def get_definition(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters
        }

    def invoke(self, parameters: Dict[str, Any]) -> Any:
        return self.func(parameters)

