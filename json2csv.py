"""JSON → CSV 変換 - エントリーポイント

    json2csv [-columns col1,col2,col3] <inputfile>
"""
import argparse
import sys
from typing import Optional, TextIO

from dotenv import load_dotenv

from services.config_loader import config_path_from_env, load_config
from services.console_reporter import ConsoleReporter
from services.csv_writer import write_csv
from services.errors import ArgumentError, AttendanceToolError, UsageError
from services.json_records import load_json_records
from pipeline.nodes.columns_node import columns_node
from pipeline.state import ConvertState

USAGE = "Usage: json2csv [-columns col1,col2,col3] <inputfile>"
TAG = "json2csv"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="json2csv",
        description="Convert a JSON array of objects to CSV on standard output.",
    )
    p.add_argument("-columns", "--columns", dest="columns", default=None,
                   help="Comma-separated list of column names to specify order")
    p.add_argument("input_file", nargs="?", help="Path to .json file with a list of objects")
    p.add_argument("--config", default=None, help="Path to config.yaml")
    return p


def run_convert(
    input_path: str,
    column_spec: Optional[str],
    stream: TextIO,
    delimiter: str = ",",
) -> ConvertState:
    """読み込み → 列解決 → 書き出しを実行して最終状態を返す"""
    state: ConvertState = {
        "input_path": input_path,
        "column_spec": column_spec,
        "records": [],
        "columns": [],
        "rows_written": 0,
    }

    state["records"] = load_json_records(input_path)
    state.update(columns_node(state))
    state["rows_written"] = write_csv(
        state["records"], state["columns"], stream, delimiter=delimiter
    )
    return state


def main(argv: Optional[list[str]] = None) -> int:
    """メイン起動処理"""
    args = _build_parser().parse_args(argv)
    reporter = ConsoleReporter(TAG)

    load_dotenv()
    try:
        if args.input_file is None:
            raise UsageError(USAGE)
        config = load_config(args.config or config_path_from_env())
        j2c_config = config["json2csv"]
        # フラグ指定が設定ファイルより優先
        column_spec = args.columns if args.columns is not None else j2c_config["columns"]
        delimiter = j2c_config["delimiter"]
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise ArgumentError(f"Delimiter must be a single character: {delimiter!r}")
        run_convert(
            args.input_file,
            column_spec,
            sys.stdout,
            delimiter=delimiter,
        )
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
