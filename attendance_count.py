"""出社日数カウンター - エントリーポイント

    attendance-count attendance.[json|csv] [yyyy-MM] [--status]
"""
import argparse
import sys
from typing import Optional

from dotenv import load_dotenv

from services.config_loader import config_path_from_env, load_config
from services.console_reporter import ConsoleReporter
from services.errors import AttendanceToolError, UsageError
from pipeline.nodes.month_node import month_node
from pipeline.nodes.load_records_node import load_records_node
from pipeline.nodes.count_node import count_node
from pipeline.nodes.compliance_node import compliance_node, format_compliance
from pipeline.state import CounterState

USAGE = "Usage: attendance-count attendance.[json|csv] [yyyy-MM]"
TAG = "attendance-count"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="attendance-count",
        description="Count office days in a month from a JSON or CSV attendance file.",
    )
    p.add_argument("data_file", nargs="?", help="Path to attendance .json or .csv file")
    p.add_argument("month", nargs="?", help="Target month as yyyy-MM (default: current month)")
    p.add_argument("--status", action="store_true",
                   help="Also print business-day compliance status for the month")
    p.add_argument("--config", default=None, help="Path to config.yaml")
    return p


def run_count(
    data_path: str,
    month_arg: Optional[str],
    config: dict,
    reporter: ConsoleReporter,
    with_status: bool = False,
) -> CounterState:
    """1回分の集計を実行して最終状態を返す"""
    state: CounterState = {
        "data_path": data_path,
        "month_arg": month_arg,
        "today": None,
        "year": 0,
        "month": 0,
        "records": [],
        "office_days": 0,
        "compliance": None,
    }

    # 1. 対象月（引数不正は読み込み前にエラーにする）
    state.update(month_node(state))

    # 2. 読み込み
    state.update(load_records_node(state, reporter=reporter, config=config))

    # 3. 集計
    state.update(count_node(state, reporter=reporter))

    # 4. コンプライアンス（任意）
    if with_status:
        state.update(compliance_node(state, config=config))

    return state


def main(argv: Optional[list[str]] = None) -> int:
    """メイン起動処理"""
    args = _build_parser().parse_args(argv)
    reporter = ConsoleReporter(TAG)

    load_dotenv()
    try:
        if args.data_file is None:
            raise UsageError(USAGE)
        config = load_config(args.config or config_path_from_env())
        state = run_count(
            args.data_file,
            args.month,
            config,
            reporter,
            with_status=args.status,
        )
        print(state["office_days"])
        if state["compliance"] is not None:
            print(format_compliance(state["compliance"]))
        return 0
    except UsageError as e:
        print(e)
        return 0
    except AttendanceToolError as e:
        reporter.error(str(e))
        return 1
    finally:
        sys.stdout.flush()


if __name__ == "__main__":
    sys.exit(main())
