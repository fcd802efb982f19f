"""
フォルダ処理モジュール

1つの写真フォルダについて、画像のコピー、サイドカーJSONの検索、
メタデータの変換と書き込みを行い、フォルダ単位の結果を返します。
"""

import logging
from pathlib import Path
from typing import Optional

from .copier import Copier
from .exceptions import FileOperationError
from .exiftool_writer import MetadataWriter
from .field_mapper import MetadataFieldMapper
from .file_scanner import FileScanner
from .logger import ProgressLogger
from .models import FolderResult, ImageEntry, PhotoFolder
from .sidecar_matcher import SidecarMatcher
from .sidecar_reader import SidecarReader


class FolderProcessor:
    """写真フォルダ単位の処理を担当するクラス"""

    def __init__(self, writer: MetadataWriter,
                 progress_logger: ProgressLogger,
                 mapper: Optional[MetadataFieldMapper] = None,
                 matcher: Optional[SidecarMatcher] = None,
                 reader: Optional[SidecarReader] = None):
        """
        FolderProcessorを初期化

        Args:
            writer: メタデータエンジン
            progress_logger: ステータス表示用ロガー
            mapper: フィールド変換（省略時は標準設定）
            matcher: サイドカーマッチング（省略時は標準の命名規則）
            reader: サイドカー読み取り
        """
        self.writer = writer
        self.progress_logger = progress_logger
        self.reader = reader or SidecarReader()
        self.mapper = mapper or MetadataFieldMapper(self.reader)
        self.matcher = matcher or SidecarMatcher()
        self.file_scanner = FileScanner()
        self.copier = Copier()
        self.logger = logging.getLogger(__name__)

    def process_folder(self, folder: Path) -> FolderResult:
        """
        写真フォルダを処理

        出力先は '<フォルダ名> output' という兄弟ディレクトリです。
        画像ごとの失敗はログに記録して次の画像に進みます。

        Args:
            folder: 写真フォルダ

        Returns:
            フォルダ単位の処理結果
        """
        output_folder = self.file_scanner.output_folder_for(folder)
        result = FolderResult(folder=folder, output_folder=output_folder)

        self.progress_logger.log_status(f"Processing folder: {folder}")

        photo_folder = PhotoFolder(path=folder, images=self.file_scanner.scan_image_files(folder))
        result.images_found = len(photo_folder.images)

        try:
            self.copier.ensure_output_folder(output_folder)
        except FileOperationError as e:
            # 出力先が無ければフォルダ内の全画像が失敗扱い
            self.progress_logger.log_error(folder, str(e))
            result.failed = len(photo_folder.images)
            result.errors.append((folder, str(e)))
            return result
        self.progress_logger.log_status(f"Output folder: {output_folder}")

        for image in photo_folder.images:
            try:
                self._process_image(photo_folder, output_folder, image, result)
            except Exception as e:
                # 1枚の失敗で実行全体を止めない
                result.failed += 1
                result.errors.append((image.path, f"unexpected error: {type(e).__name__}: {e}"))
                self.progress_logger.log_error(image.path, "unexpected error", e)

        self.progress_logger.log_folder_complete(result)
        return result

    def _process_image(self, photo_folder: PhotoFolder, output_folder: Path,
                       image: ImageEntry, result: FolderResult) -> None:
        """1枚の画像をコピーし、サイドカーがあればメタデータを書き込む"""
        match = self.matcher.find_sidecar(photo_folder.path, image)

        status, error_msg = self.copier.copy_image(image.path, output_folder)
        if status != 'success':
            error_msg = error_msg or "copy failed"
            result.failed += 1
            result.errors.append((image.path, error_msg))
            self.progress_logger.log_error(image.path, error_msg)
            return

        output_image = output_folder / image.name

        if match is None:
            result.processed += 1
            self.progress_logger.log_status(f"Copied image without metadata: {image.name}")
            return

        sidecar_name = match.sidecar_path.name
        self.progress_logger.log_status(f"Processing: {image.name} with metadata: {sidecar_name}")

        document = self.reader.load(match.sidecar_path)
        fields = self.mapper.map_fields(document)
        if not fields:
            self.logger.debug(f"No recognised fields in {sidecar_name}")

        # 書き込みは常にコピーに対して行う
        attached = bool(fields) and self.writer.write_fields(output_image, fields)
        # 例外で抜けた画像はprocessedではなくfailedに数える
        result.processed += 1
        if attached:
            result.metadata_attached += 1
            self.progress_logger.log_success(f"Successfully attached metadata to: {image.name}")
        else:
            self.progress_logger.log_warning(
                f"Could not attach metadata to: {image.name} "
                f"(metadata file available: {sidecar_name})"
            )
