"""
コマンドラインインターフェース

Takeout Metadata Processorのメインエントリーポイントです。
指定ディレクトリ（省略時はカレントディレクトリ）配下のTakeoutフォルダを処理します。
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .directory_walker import DirectoryWalker
from .exceptions import ProcessingError, ToolNotFoundError, ValidationError
from .exiftool_writer import ExifToolWriter
from .field_mapper import MetadataFieldMapper
from .folder_processor import FolderProcessor
from .logger import color_supported, create_default_logger, get_default_log_file
from .path_validator import PathValidator
from .sidecar_matcher import SidecarMatcher
from .sidecar_reader import SidecarReader


def create_parser() -> argparse.ArgumentParser:
    """
    コマンドライン引数パーサーを作成

    Returns:
        設定済みのArgumentParser
    """
    conventions = '\n'.join(
        f"  {i}. {label}" for i, label in enumerate(SidecarMatcher.describe_conventions(), 1)
    )
    parser = argparse.ArgumentParser(
        prog='takeout-metadata',
        description=(
            "Process Google Photos takeout folders and re-attach metadata to images.\n"
            "Images found directly in every 'Photos from *' folder under each 'Takeout*'\n"
            "folder are copied to a sibling '<folder> output' folder, and metadata from\n"
            "their JSON sidecars is embedded into the copies with exiftool."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Sidecar naming conventions (first existing file wins):
{conventions}

Examples:
  takeout-metadata                    # Process current directory
  takeout-metadata /path/to/takeouts  # Process specific directory

Requirements:
  - exiftool (install with: brew install exiftool)
        """
    )
    parser.add_argument(
        'directory',
        nargs='?',
        default='.',
        help='Directory containing takeout folders (default: current directory)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show debug output and write a log file'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='Write a detailed log to this file'
    )
    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable coloured output'
    )
    parser.add_argument(
        '--join-comments',
        action='store_true',
        help='Join views, URL and device type into one UserComment instead of keeping the last one'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.log_file:
        log_file = Path(args.log_file)
    else:
        log_file = get_default_log_file() if args.verbose else None
    progress_logger = create_default_logger(
        verbose=args.verbose,
        log_file=log_file,
        use_color=not args.no_color and color_supported()
    )

    try:
        writer = ExifToolWriter()
        progress_logger.log_success(f"exiftool found at {writer.exiftool_path}")

        target_dir = Path(args.directory)
        PathValidator.validate_directory(target_dir)
        target_dir = PathValidator.normalize_path(args.directory)

        progress_logger.log_processing_start(target_dir)

        reader = SidecarReader()
        processor = FolderProcessor(
            writer=writer,
            progress_logger=progress_logger,
            mapper=MetadataFieldMapper(reader, join_user_comments=args.join_comments),
            reader=reader
        )
        walker = DirectoryWalker(processor, progress_logger)
        stats = walker.walk(target_dir)

        progress_logger.log_processing_complete(stats)
        progress_logger.log_success("Script completed successfully!")
        progress_logger.log_status(
            "Check the 'output' folders next to each 'Photos from *' directory for processed images."
        )
        return 0

    except ToolNotFoundError as e:
        progress_logger.log_error(None, str(e))
        return 1
    except ValidationError as e:
        progress_logger.log_error(None, str(e))
        return 1
    except ProcessingError as e:
        progress_logger.log_error(None, f"Processing error: {e}", e)
        return 1
    except Exception as e:
        progress_logger.log_error(None, f"Unexpected error: {e}", e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
