# pipeline/nodes/columns_node.py
from typing import Iterable, Optional

from pipeline.state import ConvertState


def resolve_columns(keys: Iterable[str], column_spec: Optional[str] = None) -> list[str]:
    """出力列の順序を決定する

    指定なし: 全キーを辞書順。
    指定あり: データに存在する指定列を指定順で先頭に並べ、残りのキーを辞書順で後ろに続ける。
    データに無い列名は黙って無視する。
    """
    remaining = set(keys)

    if not column_spec or not column_spec.strip():
        return sorted(remaining)

    columns = []
    for name in column_spec.split(","):
        name = name.strip()
        if name in remaining:
            columns.append(name)
            remaining.discard(name)

    return columns + sorted(remaining)


def columns_node(state: ConvertState) -> dict:
    """先頭レコードのキーから列順を解決するノード"""
    records = state["records"]
    if not records:
        return {"columns": []}
    return {"columns": resolve_columns(records[0].keys(), state.get("column_spec"))}
