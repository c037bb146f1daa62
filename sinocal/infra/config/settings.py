from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # 日志
    LOG_LEVEL: str = "INFO"

    # 支持的公历年份范围
    MIN_YEAR: int = 1900
    MAX_YEAR: int = 2100

    # 范围查询上限（天），超出即报错
    MAX_RANGE_DAYS: int = 366

    # 周边信息查询默认前后天数
    SURROUNDING_DAYS: int = 7

    # 反向查询未指定年份时，从今年往后多查几年
    REVERSE_QUERY_YEARS_AHEAD: int = 1


settings = Settings()
