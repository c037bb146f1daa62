from .service import CalendarService

__all__ = ["CalendarService"]
