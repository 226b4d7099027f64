"""Date manipulation utilities"""

import calendar
from datetime import date
from typing import List


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of shorter months"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def generate_monthly_dates(start: date, count: int) -> List[date]:
    """Generate ``count`` monthly dates beginning at start (inclusive)"""
    return [add_months(start, i) for i in range(count)]
