import csv
import io
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from services.console_reporter import ConsoleReporter
from services.errors import FormatError, InputReadError, RecordError
from services.json_records import reject_constant

# strconv.ParseBool 互換の真偽値リテラル
TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass(frozen=True)
class AttendanceRecord:
    date: str           # YYYY-MM-DD（ロード時は検証しない）
    is_office: bool
    is_day_off: bool = False


def parse_bool(text: str) -> bool:
    """厳密な真偽値パース。未知のリテラルは RecordError"""
    if text in TRUE_LITERALS:
        return True
    if text in FALSE_LITERALS:
        return False
    raise RecordError(f"invalid boolean literal {text!r}")


def _or_default(value, default):
    return default if value is None else value


class AttendanceRecordStore(ABC):
    """勤怠レコードファイルの抽象インターフェース"""

    def __init__(self, path: Path, reporter: Optional[ConsoleReporter] = None):
        self._path = Path(path)
        self._reporter = reporter or ConsoleReporter("attendance-count")

    @property
    def path(self) -> Path:
        return self._path

    def _read_text(self) -> str:
        try:
            with open(self._path, "r", encoding="utf-8-sig", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(f"Error loading data: {e}") from e

    @abstractmethod
    def load(self) -> list[AttendanceRecord]:
        """ファイルを読み込み、ロード順のレコード列を返す"""
        ...


class JsonRecordStore(AttendanceRecordStore):
    """[{"Date": ..., "IsOffice": ..., "IsDayOff": ...}, ...] 形式"""

    def load(self) -> list[AttendanceRecord]:
        try:
            payload = json.loads(self._read_text(), parse_constant=reject_constant)
        except ValueError as e:
            raise FormatError(f"Error loading data: {e}") from e

        if not isinstance(payload, list):
            raise FormatError("Error loading data: JSON top level must be an array")

        return [self._to_record(item, index) for index, item in enumerate(payload)]

    @staticmethod
    def _to_record(item, index: int) -> AttendanceRecord:
        if not isinstance(item, dict):
            raise FormatError(f"Error loading data: element {index} is not an object")

        # null はキー欠落と同じ扱い
        date = _or_default(item.get("Date"), "")
        is_office = _or_default(item.get("IsOffice"), False)
        is_day_off = _or_default(item.get("IsDayOff"), False)

        if not isinstance(date, str):
            raise FormatError(f"Error loading data: element {index} has non-string Date")
        for name, value in (("IsOffice", is_office), ("IsDayOff", is_day_off)):
            if not isinstance(value, bool):
                raise FormatError(
                    f"Error loading data: element {index} has non-boolean {name}"
                )

        return AttendanceRecord(date=date, is_office=is_office, is_day_off=is_day_off)


class CsvRecordStore(AttendanceRecordStore):
    """Date,IsOffice,IsDayOff 形式（ヘッダー行は任意）"""

    def __init__(
        self,
        path: Path,
        reporter: Optional[ConsoleReporter] = None,
        header_token: str = "Date",
    ):
        super().__init__(path, reporter)
        self._header_token = header_token

    def load(self) -> list[AttendanceRecord]:
        reader = csv.reader(io.StringIO(self._read_text()))
        records = []
        row_number = 0
        while True:
            row_number += 1
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                # 読めない行（巨大フィールド等）はその行だけ捨てて続行
                self._reporter.warn(f"Unreadable CSV data in row {row_number}: {e}")
                continue
            if row_number == 1 and row and row[0] == self._header_token:
                continue
            if not row:
                continue
            try:
                records.append(self._to_record(row, row_number))
            except RecordError as e:
                self._reporter.warn(str(e))
        return records

    @staticmethod
    def _to_record(row: list[str], row_number: int) -> AttendanceRecord:
        if len(row) != 3:
            raise RecordError(
                f"Expected 3 columns but got {len(row)} in row {row_number}"
            )
        try:
            is_office = parse_bool(row[1])
        except RecordError:
            raise RecordError(f"Invalid IsOffice value {row[1]} in row {row_number}")
        try:
            is_day_off = parse_bool(row[2])
        except RecordError:
            raise RecordError(f"Invalid IsDayOff value {row[2]} in row {row_number}")
        return AttendanceRecord(date=row[0], is_office=is_office, is_day_off=is_day_off)


def open_store(
    path: str,
    reporter: Optional[ConsoleReporter] = None,
    header_token: str = "Date",
) -> AttendanceRecordStore:
    """拡張子（大文字小文字無視）に応じたストアを返す"""
    data_path = Path(path)
    ext = data_path.suffix.lower()
    if ext == ".json":
        return JsonRecordStore(data_path, reporter)
    if ext == ".csv":
        return CsvRecordStore(data_path, reporter, header_token=header_token)
    raise FormatError(f"Unsupported file format: {ext}. Use .json or .csv")
