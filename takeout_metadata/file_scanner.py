"""
ファイルスキャナー

Takeoutアーカイブフォルダ、写真フォルダ、画像ファイルを検索する機能を提供します。
"""

import logging
from pathlib import Path
from typing import List, Set

from .models import ImageEntry
from .path_validator import PathValidator


class FileScanner:
    """ディレクトリをスキャンしてフォルダと画像ファイルを検索するクラス"""

    ARCHIVE_PREFIX = 'Takeout'
    PHOTO_FOLDER_PREFIX = 'Photos from '
    OUTPUT_SUFFIX = ' output'

    # 画像拡張子（比較は小文字で行う）
    IMAGE_EXTENSIONS: Set[str] = {
        '.jpg', '.jpeg', '.png', '.heic', '.tiff', '.bmp', '.gif',
    }

    def __init__(self):
        """FileScannerを初期化"""
        self.logger = logging.getLogger(__name__)

    def find_archive_folders(self, root: Path) -> List[Path]:
        """
        ルート直下の 'Takeout*' ディレクトリを検索

        Args:
            root: 検索するルートディレクトリ

        Returns:
            見つかったアーカイブフォルダのパスのリスト（パス順）

        Raises:
            ValidationError: ディレクトリが無効な場合
        """
        PathValidator.validate_directory(root)

        archives = [
            path for path in root.iterdir()
            if path.is_dir() and path.name.startswith(self.ARCHIVE_PREFIX)
        ]
        return sorted(archives)

    def find_photo_folders(self, archive: Path) -> List[Path]:
        """
        アーカイブ配下（任意の深さ）の 'Photos from *' ディレクトリを検索

        このツール自身が作成した出力フォルダは除外します。

        Args:
            archive: アーカイブフォルダ

        Returns:
            見つかった写真フォルダのパスのリスト（パス順）
        """
        PathValidator.validate_directory(archive)

        folders = []
        for path in archive.rglob('*'):
            if not path.is_dir() or not path.name.startswith(self.PHOTO_FOLDER_PREFIX):
                continue
            if self.is_output_folder(path):
                self.logger.debug(f"Skipping output folder: {path}")
                continue
            folders.append(path)

        return sorted(folders)

    def scan_image_files(self, folder: Path) -> List[ImageEntry]:
        """
        フォルダ直下の画像ファイルを検索（サブディレクトリは対象外）

        Args:
            folder: スキャンするフォルダ

        Returns:
            見つかった画像ファイルのリスト（ファイル名順）
        """
        PathValidator.validate_directory(folder)

        images = []
        for file_path in sorted(folder.iterdir()):
            if file_path.is_file() and self.is_image_file(file_path):
                images.append(self.create_image_entry(file_path))

        return images

    def create_image_entry(self, file_path: Path) -> ImageEntry:
        """ファイルパスからImageEntryを作成"""
        return ImageEntry(
            path=file_path,
            basename=file_path.stem,
            extension=file_path.suffix.lstrip('.'),
        )

    def is_image_file(self, file_path: Path) -> bool:
        """
        ファイルが対象の画像ファイルかどうかを判定

        Args:
            file_path: ファイルパス

        Returns:
            画像ファイルの場合True
        """
        return file_path.suffix.lower() in self.IMAGE_EXTENSIONS

    def output_folder_for(self, folder: Path) -> Path:
        """写真フォルダに対応する出力フォルダ（兄弟ディレクトリ）のパス"""
        return folder.parent / f"{folder.name}{self.OUTPUT_SUFFIX}"

    def is_output_folder(self, folder: Path) -> bool:
        """
        このツールが作成した出力フォルダかどうかを判定

        名前が ' output' で終わり、かつ元の写真フォルダが隣に存在する場合のみ
        出力フォルダとみなします。
        """
        if not folder.name.endswith(self.OUTPUT_SUFFIX):
            return False
        source_name = folder.name[:-len(self.OUTPUT_SUFFIX)]
        return (folder.parent / source_name).is_dir()
