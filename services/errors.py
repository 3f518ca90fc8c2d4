class AttendanceToolError(Exception):
    """ツール共通の例外基底クラス"""


class UsageError(AttendanceToolError):
    """必須引数が不足している"""


class ArgumentError(AttendanceToolError):
    """引数の形式が不正（月指定、しきい値など）"""


class InputReadError(AttendanceToolError):
    """入力ファイルが存在しない、または読み込めない"""


class FormatError(AttendanceToolError):
    """未対応の拡張子、または JSON の構造が不正"""


class RecordError(AttendanceToolError):
    """CSV の1行・1フィールドが不正（警告してスキップする）"""
