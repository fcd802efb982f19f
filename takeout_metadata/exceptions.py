"""
カスタム例外クラス定義

Takeout Metadata Processorで使用する例外クラスを定義します。
"""


class ProcessingError(Exception):
    """処理エラーの基底クラス"""
    pass


class ValidationError(ProcessingError):
    """検証エラー"""
    pass


class ToolNotFoundError(ProcessingError):
    """外部ツール（exiftool）が見つからない"""
    pass


class FileOperationError(ProcessingError):
    """ファイル操作エラー"""
    pass


class SidecarReadError(ProcessingError):
    """サイドカーJSON読取エラー"""
    pass


class MetadataWriteError(ProcessingError):
    """メタデータ書き込みエラー"""
    pass
