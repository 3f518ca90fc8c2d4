from typing import TypedDict, Optional
from datetime import date


class CounterState(TypedDict):
    data_path: str                      # 入力ファイル (.json / .csv)
    month_arg: Optional[str]            # YYYY-MM（省略時は today の月）
    today: date                         # 基準日（テスト時は固定値を注入）
    year: int                           # 対象年
    month: int                          # 対象月
    records: list                       # list[AttendanceRecord]
    office_days: int                    # 対象月の出社日数
    compliance: Optional[dict]          # compliance_node の結果


class ConvertState(TypedDict):
    input_path: str
    column_spec: Optional[str]          # "c,a" のようなカンマ区切り
    records: list                       # list[dict]
    columns: list[str]                  # 解決済みの列順
    rows_written: int
