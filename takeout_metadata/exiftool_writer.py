"""
メタデータ書き込みモジュール

ExifToolを外部コマンドとして実行し、画像ファイルにメタデータを書き込みます。
書き込みは出力フォルダ内のコピーに対してのみ行い、元ファイルには触れません。
"""

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional

from .exceptions import MetadataWriteError, ToolNotFoundError
from .models import MetadataFieldSet


INSTALL_HINT = (
    "exiftool is not installed. Please install it first:\n"
    "  macOS: brew install exiftool\n"
    "  Linux: sudo apt-get install libimage-exiftool-perl (Ubuntu/Debian)\n"
    "  Windows: download from https://exiftool.org/ and add it to PATH"
)


class MetadataWriter:
    """メタデータエンジンのインターフェース"""

    def write_fields(self, image_path: Path, fields: MetadataFieldSet) -> bool:
        """
        フィールドをまとめて書き込む

        Returns:
            成功した場合True
        """
        raise NotImplementedError


class ExifToolWriter(MetadataWriter):
    """ExifTool を使用したメタデータ書き込みクラス"""

    def __init__(self, exiftool_path: Optional[Path] = None, timeout: Optional[float] = None):
        """
        ExifToolWriterを初期化

        Args:
            exiftool_path: exiftoolのパス（省略時はPATHから検索）
            timeout: 1回の書き込みのタイムアウト秒数（省略時は無制限）

        Raises:
            ToolNotFoundError: exiftoolが見つからない、または実行できない場合
        """
        self.logger = logging.getLogger(__name__)
        self.exiftool_path = exiftool_path
        self.timeout = timeout
        self.version: Optional[str] = None

        self._check_exiftool_availability()

    def _check_exiftool_availability(self) -> None:
        """ExifToolが利用可能かチェックし、パスを設定"""
        try:
            if self.exiftool_path is None:
                self.exiftool_path = self._find_exiftool()
            result = subprocess.run(
                [str(self.exiftool_path), '-ver'],
                capture_output=True,
                text=True,
                timeout=10,
                errors='replace'
            )
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            raise ToolNotFoundError(INSTALL_HINT) from e

        if result.returncode != 0:
            raise ToolNotFoundError(f"exiftool failed to run: {self.exiftool_path}")

        self.version = result.stdout.strip()
        self.logger.debug(f"exiftool found at {self.exiftool_path} (version {self.version})")

    def _find_exiftool(self) -> Path:
        """ExifToolの実行可能ファイルを検索"""
        # システムPATHから検索
        exiftool_name = 'exiftool.exe' if sys.platform == 'win32' else 'exiftool'
        exiftool_path = shutil.which(exiftool_name)

        if exiftool_path:
            return Path(exiftool_path)

        # 一般的なインストール場所を検索
        if sys.platform == 'win32':
            common_paths = [
                Path('C:/Windows/exiftool.exe'),
                Path('C:/Program Files/exiftool/exiftool.exe'),
            ]
        else:
            common_paths = [
                Path('/usr/local/bin/exiftool'),
                Path('/usr/bin/exiftool'),
                Path('/opt/homebrew/bin/exiftool'),  # Apple Silicon Mac
            ]

        for path in common_paths:
            if path.exists() and path.is_file():
                return path

        raise FileNotFoundError("exiftool not found")

    def write_fields(self, image_path: Path, fields: MetadataFieldSet) -> bool:
        """
        フィールドを1回のexiftool呼び出しでまとめて書き込む

        失敗は例外にせずFalseを返します。

        Args:
            image_path: 書き込み対象（出力フォルダ内のコピー）
            fields: 書き込むフィールド

        Returns:
            成功した場合True
        """
        if not fields:
            return False

        try:
            self._run_exiftool(image_path, fields)
            return True
        except MetadataWriteError as e:
            self.logger.debug(f"Metadata write failed: {image_path} - {e}")
            return False

    def _run_exiftool(self, image_path: Path, fields: MetadataFieldSet) -> None:
        """
        ExifToolを実行してメタデータを書き込む

        Raises:
            MetadataWriteError: ExifTool実行でエラーが発生した場合
        """
        cmd = [str(self.exiftool_path), '-overwrite_original']
        cmd.extend(fields.to_exiftool_args())
        cmd.append(str(image_path))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                encoding='utf-8',
                errors='replace'  # exiftoolはファイル名をバイト列のまま出力する
            )
        except subprocess.TimeoutExpired as e:
            raise MetadataWriteError(f"exiftool timed out after {self.timeout}s") from e
        except OSError as e:
            raise MetadataWriteError(f"exiftool could not be started: {e}") from e

        if result.returncode != 0:
            raise MetadataWriteError(
                f"exiftool exited with code {result.returncode}: {result.stderr.strip()}"
            )
