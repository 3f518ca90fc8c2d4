import sys


class ConsoleReporter:
    """警告・エラーをタグ付きで標準エラー出力に書き出す

    標準出力はプログラムの結果（件数や CSV）専用にしておく。
    """

    def __init__(self, tag: str):
        self._tag = tag

    def warn(self, message: str) -> None:
        print(f"[{self._tag}] Warning: {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        print(f"[{self._tag}] Error: {message}", file=sys.stderr)
