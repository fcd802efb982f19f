"""
ファイルコピー処理モジュール

画像ファイルを出力フォルダにそのままの内容でコピーする機能を提供します。
出力先に同名ファイルがある場合は上書きします。
"""

import logging
import shutil
from pathlib import Path
from typing import Optional, Tuple

from .exceptions import FileOperationError


class Copier:
    """画像ファイルを出力フォルダにコピーするクラス"""

    def __init__(self):
        """Copierを初期化"""
        self.logger = logging.getLogger(__name__)

    def ensure_output_folder(self, output_dir: Path) -> None:
        """
        出力フォルダを作成（既に存在する場合は何もしない）

        Raises:
            FileOperationError: 作成に失敗した場合
        """
        try:
            output_dir.mkdir(exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Could not create output folder {output_dir}: {e}") from e

    def copy_image(self, source_path: Path, output_dir: Path) -> Tuple[str, Optional[str]]:
        """
        単一ファイルをコピー（エラーメッセージ付き）

        Args:
            source_path: コピー元の画像
            output_dir: コピー先ディレクトリ

        Returns:
            (結果文字列, エラーメッセージ) のタプル
            結果文字列: 'success', 'failed'
            エラーメッセージ: エラーが発生した場合のメッセージ、それ以外はNone
        """
        target_path = output_dir / source_path.name

        if not source_path.exists():
            return 'failed', "source file does not exist"

        try:
            # shutil.copy2を使用してタイムスタンプも保持
            shutil.copy2(source_path, target_path)
            self.logger.debug(f"Copied: {source_path.name} -> {target_path}")
            return 'success', None
        except PermissionError as e:
            return 'failed', f"permission denied: {e}"
        except OSError as e:
            return 'failed', f"copy failed: {e}"
