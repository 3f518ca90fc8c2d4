# pipeline/nodes/month_node.py
import re
from datetime import MINYEAR, date
from typing import Optional

from pipeline.state import CounterState
from services.errors import ArgumentError

_MONTH_PATTERN = re.compile(r"(\d{4})-(\d{2})", re.ASCII)


def _today() -> date:
    """テスト時にモック可能な今日の日付取得"""
    return date.today()


def parse_month(text: str) -> tuple[int, int]:
    """YYYY-MM 形式を (年, 月) に変換する。不正な形式は ArgumentError"""
    match = _MONTH_PATTERN.fullmatch(text)
    if not match:
        raise ArgumentError(f"Invalid month argument: {text!r} (expected yyyy-MM)")
    year, month = int(match.group(1)), int(match.group(2))
    if year < MINYEAR:
        raise ArgumentError(f"Invalid month argument: {text!r} (year out of range)")
    if not 1 <= month <= 12:
        raise ArgumentError(f"Invalid month argument: {text!r} (month out of range)")
    return year, month


def resolve_month(month_arg: Optional[str], today: date) -> tuple[int, int]:
    if month_arg is None:
        return today.year, today.month
    return parse_month(month_arg)


def month_node(state: CounterState) -> dict:
    """対象年月を決定するノード"""
    today = state.get("today") or _today()
    year, month = resolve_month(state.get("month_arg"), today)
    return {"today": today, "year": year, "month": month}
