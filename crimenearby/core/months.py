"""
Calendar month helpers for crimenearby.

The police API addresses data by ISO month (``YYYY-MM``), always in UTC.
"""

import calendar
from datetime import date, datetime, timezone
from typing import List, Optional, Union

DateLike = Union[date, datetime]

def _as_utc_date(d: Optional[DateLike]) -> date:
    if d is None:
        return datetime.now(timezone.utc).date()
    if isinstance(d, datetime):
        if d.tzinfo is not None:
            d = d.astimezone(timezone.utc)
        return d.date()
    return d

def iso_month(d: Optional[DateLike] = None) -> str:
    """날짜 → ``YYYY-MM``"""
    d = _as_utc_date(d)
    return f"{d.year:04d}-{d.month:02d}"

def shift_month(d: Optional[DateLike], back: int) -> str:
    """``back`` 개월 이전의 ISO 월"""
    d = _as_utc_date(d)
    index = d.year * 12 + (d.month - 1) - back
    year, month0 = divmod(index, 12)
    return f"{year:04d}-{month0 + 1:02d}"

def month_window(anchor: Optional[DateLike], months_back: int) -> List[str]:
    """최신 → 과거 순 ISO 월 목록"""
    anchor = _as_utc_date(anchor)
    return [shift_month(anchor, back) for back in range(months_back)]

def human_month(iso: str) -> str:
    """``2025-06`` → ``June 2025`` (해석 불가하면 그대로)"""
    try:
        parsed = datetime.strptime(iso, "%Y-%m")
    except (TypeError, ValueError):
        return iso
    return f"{calendar.month_name[parsed.month]} {parsed.year}"
