"""Publishers: calendar feed, status page and email digest."""

from acting_calendar.publishers.calendar import build_calendar, write_calendar
from acting_calendar.publishers.digest import send_digest
from acting_calendar.publishers.status_page import render_status_page, write_status_page

__all__ = [
    "build_calendar",
    "write_calendar",
    "send_digest",
    "render_status_page",
    "write_status_page",
]
