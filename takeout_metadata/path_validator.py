"""
パス検証ユーティリティ

処理対象ディレクトリの検証と正規化を提供します。
"""

import os
from pathlib import Path

from .exceptions import ValidationError


class PathValidator:
    """パス検証を行うユーティリティクラス"""

    @staticmethod
    def validate_directory(path: Path) -> None:
        """
        ディレクトリの存在とアクセス権を検証

        Args:
            path: 検証するディレクトリパス

        Raises:
            ValidationError: ディレクトリが存在しない、アクセス不可能、
                           またはディレクトリではない場合
        """
        if not path.exists():
            raise ValidationError(f"Directory does not exist: {path}")

        if not path.is_dir():
            raise ValidationError(f"Not a directory: {path}")

        # 読み取り権限の確認
        if not os.access(path, os.R_OK):
            raise ValidationError(f"Directory is not readable: {path}")

    @staticmethod
    def normalize_path(path_str: str) -> Path:
        """
        パス文字列を正規化して絶対パスのPathオブジェクトに変換

        Args:
            path_str: パス文字列

        Returns:
            正規化されたPathオブジェクト
        """
        return Path(path_str).expanduser().resolve()
