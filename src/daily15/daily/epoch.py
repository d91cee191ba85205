from __future__ import annotations

from datetime import date
from typing import Optional, Union


DEFAULT_EPOCH = "2025-09-19"
SHARE_TEMPLATE = "Daily15.xyz #{number}\nSolved in {moves} moves."

DateLike = Union[str, date]


def _as_date(value: DateLike) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def daily_seed(today: Optional[date] = None) -> int:
    """Encode the local calendar date as YYYYMMDD"""
    today = today or date.today()
    return today.year * 10000 + today.month * 100 + today.day


def puzzle_number(epoch: DateLike = DEFAULT_EPOCH, today: Optional[date] = None) -> int:
    """1-based count of calendar days since `epoch` (day one is the epoch itself)"""
    today = today or date.today()
    return (today - _as_date(epoch)).days + 1


def share_text(moves: int, number: Optional[int] = None) -> str:
    if number is None:
        number = puzzle_number()
    return SHARE_TEMPLATE.format(number=number, moves=moves)
