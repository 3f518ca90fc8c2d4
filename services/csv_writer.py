import csv
import json
from typing import Any, Iterable, TextIO


def format_value(value: Any) -> str:
    """セル値の文字列表現

    None/欠損 → 空文字、真偽値 → "true"/"false"、
    リスト・オブジェクト → コンパクトな JSON 文字列。
    """
    if value is None:
        return ""
    # bool は int のサブクラスなので先に判定する
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def write_csv(
    records: Iterable[dict],
    columns: list[str],
    stream: TextIO,
    delimiter: str = ",",
) -> int:
    """ヘッダー行とレコード行を書き出し、書き出したデータ行数を返す

    列が空（入力配列が空）の場合は何も書き出さない。
    """
    if not columns:
        return 0

    writer = csv.writer(
        stream,
        delimiter=delimiter,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writerow(columns)

    count = 0
    for record in records:
        writer.writerow([format_value(record.get(key)) for key in columns])
        count += 1
    return count
