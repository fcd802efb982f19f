"""
ディレクトリ走査モジュール

ルート直下のTakeoutアーカイブフォルダを探し、その中の 'Photos from *'
フォルダごとにFolderProcessorを呼び出して結果を集計します。
"""

from pathlib import Path
from typing import List

from .exceptions import ValidationError
from .file_scanner import FileScanner
from .folder_processor import FolderProcessor
from .logger import ProgressLogger
from .models import ProcessingStats


class DirectoryWalker:
    """アーカイブフォルダと写真フォルダを走査するクラス"""

    def __init__(self, processor: FolderProcessor, progress_logger: ProgressLogger):
        """
        DirectoryWalkerを初期化

        Args:
            processor: 写真フォルダの処理を行うFolderProcessor
            progress_logger: ステータス表示用ロガー
        """
        self.processor = processor
        self.progress_logger = progress_logger
        self.file_scanner = FileScanner()

    def walk(self, root: Path) -> ProcessingStats:
        """
        ルートディレクトリ配下のすべての写真フォルダを処理

        アーカイブフォルダや写真フォルダが見つからない場合は警告のみで、
        エラーにはなりません。

        Args:
            root: Takeoutフォルダを含むディレクトリ

        Returns:
            実行全体の処理統計

        Raises:
            ValidationError: ルートディレクトリが無効な場合
        """
        stats = ProcessingStats()

        self.progress_logger.log_status(f"Processing all takeout folders in: {root}")
        archives = self.file_scanner.find_archive_folders(root)
        stats.archive_folders_found = len(archives)

        if not archives:
            self.progress_logger.log_warning(f"No takeout folders found in: {root}")
            return stats

        self.progress_logger.log_status(f"Found {len(archives)} takeout folder(s)")

        for archive in archives:
            self.progress_logger.log_status(f"Processing takeout folder: {archive.name}")
            photo_folders = self._find_photo_folders(archive)
            stats.photo_folders_found += len(photo_folders)

            if not photo_folders:
                self.progress_logger.log_warning(f"No 'Photos from *' folders found in: {archive}")
                continue

            self.progress_logger.log_status(f"Found {len(photo_folders)} photo folder(s) to process")

            for folder in photo_folders:
                try:
                    stats.folder_results.append(self.processor.process_folder(folder))
                except ValidationError as e:
                    # 走査後に削除・変更されたフォルダ
                    self.progress_logger.log_error(folder, str(e))

            self.progress_logger.log_success(f"Completed processing all photo folders in: {archive}")

        self.progress_logger.log_success("Completed processing all takeout folders")
        return stats

    def _find_photo_folders(self, archive: Path) -> List[Path]:
        self.progress_logger.log_status(f"Searching for 'Photos from *' folders in: {archive}")
        return self.file_scanner.find_photo_folders(archive)
