#!/usr/bin/env python3
"""
Takeout Metadata Processor - 基本的な使用例

プログラムから直接ツールの機能を呼び出す例を示します。
exiftoolがインストールされている必要があります。
"""

import sys
from pathlib import Path

from takeout_metadata import (
    DirectoryWalker, ExifToolWriter, FileScanner, FolderProcessor, MetadataFieldMapper,
    SidecarMatcher, SidecarReader, ToolNotFoundError, create_default_logger
)


def example_inspect_folder(folder: Path):
    """写真フォルダの画像とサイドカーの対応、変換されるフィールドを表示（書き込みなし）"""
    scanner = FileScanner()
    matcher = SidecarMatcher()
    reader = SidecarReader()
    mapper = MetadataFieldMapper(reader)

    for image in scanner.scan_image_files(folder):
        match = matcher.find_sidecar(folder, image)
        if match is None:
            print(f"{image.name}: サイドカーなし")
            continue

        fields = mapper.map_fields(reader.load(match.sidecar_path))
        print(f"{image.name}: {match.sidecar_path.name} ({match.convention})")
        for name, value in fields.items():
            print(f"    {name} = {value}")


def example_process_all(root: Path):
    """ルート配下のすべてのTakeoutフォルダを処理"""
    progress_logger = create_default_logger(use_color=True)

    try:
        writer = ExifToolWriter()
    except ToolNotFoundError as e:
        print(f"⚠️  {e}")
        return

    processor = FolderProcessor(writer, progress_logger)
    walker = DirectoryWalker(processor, progress_logger)

    progress_logger.log_processing_start(root)
    stats = walker.walk(root)
    progress_logger.log_processing_complete(stats)


def main():
    root = Path(sys.argv[1] if len(sys.argv) > 1 else "~/Downloads/takeout").expanduser()
    if not root.is_dir():
        print(f"⚠️  ディレクトリが存在しません: {root}")
        return

    scanner = FileScanner()
    for archive in scanner.find_archive_folders(root):
        for folder in scanner.find_photo_folders(archive):
            print(f"--- {folder}")
            example_inspect_folder(folder)

    example_process_all(root)


if __name__ == '__main__':
    main()
