# pipeline/nodes/count_node.py
import re
from datetime import date
from typing import Iterable, Optional

from pipeline.state import CounterState
from services.console_reporter import ConsoleReporter
from services.errors import RecordError
from services.record_store import AttendanceRecord

_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


def parse_record_date(text: str) -> date:
    """YYYY-MM-DD 形式の厳密なパース。不正な値は RecordError"""
    match = _DATE_PATTERN.fullmatch(text)
    if not match:
        raise RecordError(f"Error parsing date {text!r}")
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError as e:
        raise RecordError(f"Error parsing date {text!r}: {e}") from e


def count_office_days(
    records: Iterable[AttendanceRecord],
    year: int,
    month: int,
    reporter: Optional[ConsoleReporter] = None,
) -> int:
    """対象月の出社日数を返す。日付が不正なレコードは警告してスキップする

    is_day_off は集計条件に使わない。
    """
    office_days = 0
    for record in records:
        try:
            record_date = parse_record_date(record.date)
        except RecordError as e:
            if reporter:
                reporter.warn(str(e))
            continue

        if record_date.year == year and record_date.month == month and record.is_office:
            office_days += 1

    return office_days


def count_node(state: CounterState, reporter: ConsoleReporter = None) -> dict:
    """対象月の出社日数を数えるノード"""
    office_days = count_office_days(
        state["records"], state["year"], state["month"], reporter=reporter
    )
    return {"office_days": office_days}
