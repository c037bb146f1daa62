import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from sinocal.infra.config.settings import settings
from sinocal.infra.errors import CalendarError, UnknownOperationError, ValidationError, describe_error
from sinocal.infra.logger import logger

from .aggregator import DateAggregator
from .date_utils import parse_date
from .models import (
    DateRecord,
    DateStatisticsRecord,
    FestivalEntry,
    Operation,
    SolarTermEntry,
    SurroundingInfo,
)
from .reverse_query import ReverseQueryEngine

REVERSE_QUERY_TYPES = ("lunar", "festival", "solar_term")
RANGE_CATEGORIES = ("rest_days", "work_days", "festivals", "solar_terms")

_DATE_SCHEMA = {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"}


class CalendarService:
    def __init__(self, aggregator: Optional[DateAggregator] = None, log_level: Optional[str] = None):
        if log_level:
            logger.set_level(log_level)
        self.aggregator = aggregator or DateAggregator()
        self.reverse = ReverseQueryEngine(self.aggregator)
        self.operations: Dict[str, Operation] = {}
        self._register_operations()

    # ------------------ 直接调用 ------------------

    def today(self) -> DateRecord:
        return self.get_date_info(datetime.date.today())

    def get_date_info(self, date: datetime.date) -> DateRecord:
        return self.aggregator.compose(date)

    def get_date_range_info(self, start: datetime.date, end: datetime.date) -> List[DateRecord]:
        return self.aggregator.range_info(start, end)

    def get_date_statistics(self, date: datetime.date) -> DateStatisticsRecord:
        return self.aggregator.statistics(date)

    def get_month_festivals(self, year: int, month: int) -> List[FestivalEntry]:
        return self.aggregator.month_festivals(year, month)

    def get_year_solar_terms(self, year: int) -> List[SolarTermEntry]:
        return self.aggregator.year_solar_terms(year)

    def get_surrounding_info(self, date: datetime.date, days: Optional[int] = None) -> SurroundingInfo:
        return self.aggregator.surrounding_info(date, days)

    def reverse_query_by_name(
        self, query: str, query_type: str, year_range: Union[int, Sequence[int], None] = None
    ) -> List[DateRecord]:
        if query_type not in REVERSE_QUERY_TYPES:
            raise UnknownOperationError(query_type)
        if query_type == "lunar" and year_range is None:
            return self.reverse.query_lunar_year(query)
        years = self._years(year_range)
        if query_type == "lunar":
            return self.reverse.query_lunar_date(query, years)
        if query_type == "festival":
            return self.reverse.query_festival(query, years)
        return self.reverse.query_solar_term(query, years)

    def query_by_date_range(self, start: datetime.date, end: datetime.date, category: str) -> List[DateRecord]:
        return self.reverse.query_by_date_range(start, end, category)

    @staticmethod
    def _years(year_range: Union[int, Sequence[int], None]) -> List[int]:
        if isinstance(year_range, int):
            return [year_range]
        if year_range is not None:
            return list(year_range)
        this_year = datetime.date.today().year
        return list(range(this_year, this_year + settings.REVERSE_QUERY_YEARS_AHEAD + 1))

    # ------------------ 按名称调用 ------------------

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """按操作名分发，参数使用 YYYY-MM-DD 字符串"""
        logger.info("CalendarService", f"调用 {name}: {arguments}")
        operation = self.operations.get(name)
        if operation is None:
            raise UnknownOperationError(name)
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ValidationError("参数必须是对象类型")
        try:
            return operation.invoke(arguments)
        except CalendarError as e:
            logger.warn("CalendarService", f"{name} 调用失败: {describe_error(e)['message']}")
            raise

    def list_operations(self) -> List[Dict[str, Any]]:
        return [op.get_definition() for op in self.operations.values()]

    def _register(self, name: str, description: str, properties: Dict[str, Any], required: List[str], func):
        self.operations[name] = Operation(
            name=name,
            description=description,
            parameters={"type": "object", "properties": properties, "required": required},
            func=func,
        )

    def _register_operations(self):
        self._register(
            "get_date_info", "获取指定日期的完整信息，包括农历、节日、24节气、工作日类型等",
            {"date": _DATE_SCHEMA}, ["date"],
            lambda args: self.get_date_info(_date_arg(args, "date")),
        )
        self._register(
            "get_date_range_info", "获取指定日期范围内所有日期的信息",
            {"startDate": _DATE_SCHEMA, "endDate": _DATE_SCHEMA}, ["startDate", "endDate"],
            lambda args: self.get_date_range_info(_date_arg(args, "startDate"), _date_arg(args, "endDate")),
        )
        self._register(
            "get_date_statistics", "获取指定日期的详细统计信息",
            {"date": _DATE_SCHEMA}, ["date"],
            lambda args: self.get_date_statistics(_date_arg(args, "date")),
        )
        self._register(
            "get_month_festivals", "查找指定月份的所有节日",
            {"year": {"type": "integer"}, "month": {"type": "integer"}}, ["year", "month"],
            lambda args: self.get_month_festivals(_year_arg(args, "year"), _month_arg(args, "month")),
        )
        self._register(
            "get_year_solar_terms", "查找指定年份的所有节气",
            {"year": {"type": "integer"}}, ["year"],
            lambda args: self.get_year_solar_terms(_year_arg(args, "year")),
        )
        self._register(
            "get_surrounding_info", "获取指定日期前后的节日、节气和调休信息",
            {"date": _DATE_SCHEMA, "days": {"type": "integer", "default": settings.SURROUNDING_DAYS}}, ["date"],
            lambda args: self.get_surrounding_info(_date_arg(args, "date"), _days_arg(args)),
        )
        self._register(
            "reverse_query_by_name", "通过农历日期、节日名称或节气名称反查公历日期",
            {
                "query": {"type": "string"},
                "type": {"type": "string", "enum": list(REVERSE_QUERY_TYPES)},
                "yearRange": {"type": ["integer", "array"], "items": {"type": "integer"}},
            },
            ["query", "type"],
            self._call_reverse_query,
        )
        self._register(
            "query_by_date_range", "按类别筛选日期范围内的休息日、工作日、节日或节气",
            {
                "startDate": _DATE_SCHEMA,
                "endDate": _DATE_SCHEMA,
                "type": {"type": "string", "enum": list(RANGE_CATEGORIES)},
            },
            ["startDate", "endDate", "type"],
            lambda args: self.query_by_date_range(
                _date_arg(args, "startDate"), _date_arg(args, "endDate"), _str_arg(args, "type")
            ),
        )

    def _call_reverse_query(self, args: Dict[str, Any]) -> List[DateRecord]:
        query = _str_arg(args, "query")
        if not query.strip():
            raise ValidationError("查询内容必须是有效的字符串")
        query_type = _str_arg(args, "type")
        year_range = args.get("yearRange")
        if year_range is not None:
            years = [year_range] if isinstance(year_range, int) else year_range
            if not isinstance(years, (list, tuple)):
                raise ValidationError("yearRange 必须是年份或年份数组")
            year_range = [_check_year(y) for y in years]
        return self.reverse_query_by_name(query, query_type, year_range)


def _require(args: Dict[str, Any], key: str) -> Any:
    if key not in args:
        raise ValidationError(f"缺少必需参数: {key}")
    return args[key]


def _str_arg(args: Dict[str, Any], key: str) -> str:
    value = _require(args, key)
    if not isinstance(value, str):
        raise ValidationError(f"参数 {key} 必须是字符串")
    return value


def _date_arg(args: Dict[str, Any], key: str) -> datetime.date:
    date = parse_date(_str_arg(args, key))
    _check_year(date.year)
    return date


def _check_year(year: Any) -> int:
    if not isinstance(year, int) or isinstance(year, bool):
        raise ValidationError("年份必须是整数")
    if not settings.MIN_YEAR <= year <= settings.MAX_YEAR:
        raise ValidationError(f"年份必须在{settings.MIN_YEAR}-{settings.MAX_YEAR}之间")
    return year


def _year_arg(args: Dict[str, Any], key: str) -> int:
    return _check_year(_require(args, key))


def _month_arg(args: Dict[str, Any], key: str) -> int:
    month = _require(args, key)
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        raise ValidationError("月份必须是1-12之间的整数")
    return month


def _days_arg(args: Dict[str, Any]) -> Optional[int]:
    days = args.get("days")
    if days is None:
        return None
    if not isinstance(days, int) or isinstance(days, bool) or days < 0:
        raise ValidationError("days 必须是非负整数")
    return days
