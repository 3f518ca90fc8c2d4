from pipeline.state import CounterState
from services.console_reporter import ConsoleReporter
from services.record_store import open_store


def load_records_node(
    state: CounterState,
    reporter: ConsoleReporter = None,
    config: dict = None,
) -> dict:
    """拡張子に応じたストアから勤怠レコードを読み込むノード"""
    if config is None:
        config = {"attendance": {"header_token": "Date"}}

    store = open_store(
        state["data_path"],
        reporter=reporter,
        header_token=config["attendance"]["header_token"],
    )
    return {"records": store.load()}
