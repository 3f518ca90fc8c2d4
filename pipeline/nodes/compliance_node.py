# pipeline/nodes/compliance_node.py
import math
from datetime import date
from enum import Enum

from pipeline.state import CounterState
from services.business_calendar import BusinessCalendar
from services.errors import ArgumentError


class ComplianceStatus(str, Enum):
    SECURED = "SECURED"         # 月全体の必要日数を達成済み
    COMPLIANT = "COMPLIANT"     # 今日時点の必要日数を満たしている
    WARNING = "WARNING"         # 不足しているが月内に挽回可能
    CRITICAL = "CRITICAL"       # 残り営業日をすべて出社しても不足


def _required_days(business_days: int, threshold: float) -> int:
    # 10 * 0.3 = 3.0000000000000004 のような誤差で切り上げないよう丸める
    return math.ceil(round(business_days * threshold, 9))


def evaluate_compliance(
    attendance: int,
    year: int,
    month: int,
    today: date,
    threshold: float,
    calendar_service: BusinessCalendar,
) -> dict:
    """出社日数と営業日数からコンプライアンス状態を判定する"""
    if not 0 <= threshold <= 1:
        raise ArgumentError(f"Compliance threshold must be between 0 and 1: {threshold}")

    total = calendar_service.business_days_in_month(year, month)
    elapsed = calendar_service.business_days_through(year, month, today)
    remaining = total - elapsed

    required_total = _required_days(total, threshold)
    required_rolling = _required_days(elapsed, threshold)
    max_possible = attendance + remaining

    if attendance >= required_total:
        status = ComplianceStatus.SECURED
    elif attendance >= required_rolling:
        status = ComplianceStatus.COMPLIANT
    elif max_possible < required_total:
        status = ComplianceStatus.CRITICAL
    else:
        status = ComplianceStatus.WARNING

    return {
        "status": status,
        "attendance": attendance,
        "required_total": required_total,
        "required_rolling": required_rolling,
        "business_days_total": total,
        "business_days_elapsed": elapsed,
    }


def format_compliance(result: dict) -> str:
    return (
        f"{result['status'].value} {result['attendance']}/{result['required_total']} "
        f"(business days {result['business_days_elapsed']}/{result['business_days_total']})"
    )


def _threshold(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ArgumentError(f"Compliance threshold must be a number: {value!r}")


def compliance_node(
    state: CounterState,
    calendar_service: BusinessCalendar = None,
    config: dict = None,
) -> dict:
    """対象月のコンプライアンス状態を判定するノード"""
    if config is None:
        config = {"compliance": {"threshold": 0.5, "exclude_public_holidays": False}}

    comp_config = config["compliance"]
    if calendar_service is None:
        calendar_service = BusinessCalendar(
            exclude_public_holidays=comp_config["exclude_public_holidays"]
        )

    result = evaluate_compliance(
        attendance=state["office_days"],
        year=state["year"],
        month=state["month"],
        today=state["today"],
        threshold=_threshold(comp_config["threshold"]),
        calendar_service=calendar_service,
    )
    return {"compliance": result}
