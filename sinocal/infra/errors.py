from typing import Any, Dict


class CalendarError(Exception):
    """日历服务错误的基类"""
    prefix = "系统错误"


class ValidationError(CalendarError):
    """参数缺失或格式不合法"""
    prefix = "输入验证错误"


class DateParseError(CalendarError):
    """日期字符串无法解析"""
    prefix = "日期解析错误"


class DateRangeError(CalendarError):
    """开始日期晚于结束日期，或范围超出上限"""
    prefix = "日期范围错误"


class UnknownOperationError(CalendarError):
    """未知的操作名或查询类型"""
    prefix = "操作错误"

    def __init__(self, name: str):
        super().__init__(f"未知的操作: {name}")
        self.name = name


def describe_error(exc: BaseException) -> Dict[str, Any]:
    """把异常整理成调用方可直接返回的字典"""
    if isinstance(exc, CalendarError):
        error_type = type(exc).__name__
        message = f"{exc.prefix}: {exc}"
    else:
        error_type = "SystemError"
        message = f"{CalendarError.prefix}: {exc}"
    return {"error": True, "type": error_type, "message": message}
