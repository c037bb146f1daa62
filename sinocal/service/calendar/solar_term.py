from datetime import date as dt
from typing import Dict, List, Optional, Tuple

from sinocal.infra.config.settings import settings

from .converter import LunarConverter, converter as default_converter
from .date_utils import iter_year
from .models import SolarTermDefinition
from .rules import SOLAR_TERMS

TermOnDate = Tuple[str, dt]


class SolarTermResolver:
    def __init__(self, lunar_converter: Optional[LunarConverter] = None):
        self.converter = lunar_converter or default_converter

    def term_of_day(self, date: dt) -> Optional[str]:
        return self.converter.term_of_day(date)

    def is_term(self, date: dt) -> bool:
        return self.term_of_day(date) is not None

    def year_terms(self, year: int) -> Dict[str, dt]:
        """逐日扫描一整年，按日期先后得到 节气名 -> 日期"""
        terms: Dict[str, dt] = {}
        if not settings.MIN_YEAR <= year <= settings.MAX_YEAR:
            return terms
        for day in iter_year(year):
            name = self.term_of_day(day)
            if name:
                terms[name] = day
        return terms

    def next_term(self, date: dt) -> Optional[TermOnDate]:
        for name, term_date in self.year_terms(date.year).items():
            if term_date > date:
                return name, term_date
        following = list(self.year_terms(date.year + 1).items())
        if following:
            return following[0]
        return None

    def previous_term(self, date: dt) -> Optional[TermOnDate]:
        ordered = sorted(self.year_terms(date.year).items(), key=lambda item: item[1])
        for name, term_date in reversed(ordered):
            if term_date < date:
                return name, term_date
        preceding = sorted(self.year_terms(date.year - 1).items(), key=lambda item: item[1])
        if preceding:
            return preceding[-1]
        return None

    @staticmethod
    def all_terms() -> List[SolarTermDefinition]:
        return list(SOLAR_TERMS)

    @staticmethod
    def term_by_name(name: str) -> Optional[SolarTermDefinition]:
        for term in SOLAR_TERMS:
            if term.name == name:
                return term
        return None
