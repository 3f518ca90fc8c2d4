import csv
import json

import pytest

from services.errors import FormatError, InputReadError, RecordError
from services.record_store import (
    AttendanceRecord,
    CsvRecordStore,
    JsonRecordStore,
    open_store,
    parse_bool,
)


class _Recorder:
    """警告メッセージを記録するだけのレポーター"""

    def __init__(self):
        self.warnings = []

    def warn(self, message):
        self.warnings.append(message)

    def error(self, message):
        pass


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
def test_parse_bool_true(text):
    assert parse_bool(text) is True


@pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
def test_parse_bool_false(text):
    assert parse_bool(text) is False


@pytest.mark.parametrize("text", ["yes", "", " true", "tRUE", "2"])
def test_parse_bool_invalid(text):
    with pytest.raises(RecordError):
        parse_bool(text)


def test_open_store_by_extension(tmp_path):
    """拡張子（大文字小文字無視）でストアが選ばれること"""
    assert isinstance(open_store(str(tmp_path / "a.json")), JsonRecordStore)
    assert isinstance(open_store(str(tmp_path / "a.JSON")), JsonRecordStore)
    assert isinstance(open_store(str(tmp_path / "a.Csv")), CsvRecordStore)


@pytest.mark.parametrize("name", ["a.txt", "a.xlsx", "attendance"])
def test_open_store_unsupported(tmp_path, name):
    """未対応の拡張子はFormatErrorになること"""
    with pytest.raises(FormatError, match="Unsupported file format"):
        open_store(str(tmp_path / name))


def test_json_load(tmp_path):
    """JSON配列からレコードを読み込めること"""
    path = _write(tmp_path, "a.json", json.dumps([
        {"Date": "2026-10-01", "IsOffice": True, "IsDayOff": False},
        {"Date": "2026-10-02", "IsOffice": False, "IsDayOff": True},
    ]))
    records = JsonRecordStore(path).load()
    assert records == [
        AttendanceRecord(date="2026-10-01", is_office=True, is_day_off=False),
        AttendanceRecord(date="2026-10-02", is_office=False, is_day_off=True),
    ]


def test_json_missing_fields_default(tmp_path):
    """IsDayOff/IsOffice/Date が無い場合は既定値になること"""
    path = _write(tmp_path, "a.json", '[{"Date": "2026-10-01", "IsOffice": true}, {}]')
    records = JsonRecordStore(path).load()
    assert records[0].is_day_off is False
    assert records[1] == AttendanceRecord(date="", is_office=False, is_day_off=False)


def test_json_null_fields_default(tmp_path):
    """null の Date/IsOffice/IsDayOff はキー欠落と同じ既定値になること"""
    path = _write(
        tmp_path, "a.json",
        '[{"Date": null, "IsOffice": true}, {"Date": "2026-10-01", "IsOffice": null, "IsDayOff": null}]',
    )
    records = JsonRecordStore(path).load()
    assert records[0] == AttendanceRecord(date="", is_office=True, is_day_off=False)
    assert records[1] == AttendanceRecord(date="2026-10-01", is_office=False, is_day_off=False)


def test_json_empty_array(tmp_path):
    path = _write(tmp_path, "a.json", "[]")
    assert JsonRecordStore(path).load() == []


@pytest.mark.parametrize("content", [
    "{not json",
    '{"Date": "2026-10-01"}',
    '["2026-10-01"]',
    '[{"Date": "2026-10-01", "IsOffice": "true"}]',
    '[{"Date": 20261001, "IsOffice": true}]',
    '[{"Date": "2026-10-01", "IsOffice": true, "Extra": NaN}]',
    '[{"Date": "2026-10-01", "IsOffice": true, "Extra": -Infinity}]',
])
def test_json_malformed(tmp_path, content):
    """不正なJSONはFormatErrorになること"""
    path = _write(tmp_path, "a.json", content)
    with pytest.raises(FormatError):
        JsonRecordStore(path).load()


def test_missing_file(tmp_path):
    """存在しないファイルはInputReadErrorになること"""
    with pytest.raises(InputReadError):
        JsonRecordStore(tmp_path / "missing.json").load()
    with pytest.raises(InputReadError):
        CsvRecordStore(tmp_path / "missing.csv").load()


def test_csv_with_header(tmp_path):
    """ヘッダー行がスキップされること"""
    path = _write(
        tmp_path, "a.csv",
        "Date,IsOffice,IsDayOff\n2026-10-01,true,false\n2026-10-02,false,true\n",
    )
    records = CsvRecordStore(path).load()
    assert [r.date for r in records] == ["2026-10-01", "2026-10-02"]
    assert records[0].is_office is True
    assert records[1].is_day_off is True


def test_csv_without_header(tmp_path):
    path = _write(tmp_path, "a.csv", "2026-10-01,1,0\r\n2026-10-02,T,F\r\n")
    records = CsvRecordStore(path).load()
    assert len(records) == 2
    assert records[1].is_office is True


def test_csv_custom_header_token(tmp_path):
    path = _write(tmp_path, "a.csv", "Day,Office,Off\n2026-10-01,true,false\n")
    records = CsvRecordStore(path, header_token="Day").load()
    assert len(records) == 1


def test_csv_bom_header(tmp_path):
    """BOM付きのCSVでもヘッダーが認識されること"""
    path = tmp_path / "a.csv"
    path.write_text("\ufeffDate,IsOffice,IsDayOff\n2026-10-01,true,false\n", encoding="utf-8")
    assert len(CsvRecordStore(path).load()) == 1


def test_csv_bad_rows_skipped(tmp_path):
    """列数不正・真偽値不正の行は警告してスキップされること"""
    path = _write(
        tmp_path, "a.csv",
        "Date,IsOffice,IsDayOff\n"
        "2026-10-01,true,false\n"
        "2026-10-02,yes,false\n"
        "2026-10-03,true,maybe\n"
        "2026-10-04,true\n"
        "2026-10-05,true,false,extra\n"
        "\n"
        "2026-10-06,false,false\n",
    )
    recorder = _Recorder()
    records = CsvRecordStore(path, reporter=recorder).load()

    assert [r.date for r in records] == ["2026-10-01", "2026-10-06"]
    assert len(recorder.warnings) == 4
    assert "Invalid IsOffice value yes in row 3" in recorder.warnings[0]
    assert "Invalid IsDayOff value maybe in row 4" in recorder.warnings[1]


def test_csv_date_kept_verbatim(tmp_path):
    """日付はロード時に検証されないこと"""
    path = _write(tmp_path, "a.csv", "not-a-date,true,false\n")
    records = CsvRecordStore(path).load()
    assert records[0].date == "not-a-date"


def test_csv_empty_file(tmp_path):
    path = _write(tmp_path, "a.csv", "")
    assert CsvRecordStore(path).load() == []


def test_csv_oversized_field_skips_row(tmp_path):
    """上限を超える巨大フィールドの行だけが警告付きでスキップされること"""
    path = _write(
        tmp_path, "a.csv",
        "Date,IsOffice,IsDayOff\n"
        "2026-10-01,true,false\n"
        f"{'x' * 64},true,false\n"
        "2026-10-03,true,false\n",
    )
    recorder = _Recorder()
    old_limit = csv.field_size_limit(32)
    try:
        records = CsvRecordStore(path, reporter=recorder).load()
    finally:
        csv.field_size_limit(old_limit)

    assert [r.date for r in records] == ["2026-10-01", "2026-10-03"]
    assert len(recorder.warnings) == 1
    assert "Unreadable CSV data in row 3" in recorder.warnings[0]
