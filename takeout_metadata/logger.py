"""
ロギングシステム

Takeout Metadata Processorのロギング機能を提供します。
[INFO] / [SUCCESS] / [WARNING] / [ERROR] 形式の色付きステータス行を標準出力に、
必要に応じて詳細ログをファイルに出力します。
"""

import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import FolderResult, ProcessingStats


LOGGER_NAME = 'takeout_metadata'

# INFOとWARNINGの間の成功レベル
SUCCESS = 25
logging.addLevelName(SUCCESS, 'SUCCESS')

ANSI_RESET = '\033[0m'
LEVEL_COLORS = {
    logging.DEBUG: '\033[0;36m',
    logging.INFO: '\033[0;34m',
    SUCCESS: '\033[0;32m',
    logging.WARNING: '\033[1;33m',
    logging.ERROR: '\033[0;31m',
    logging.CRITICAL: '\033[0;31m',
}


class StatusFormatter(logging.Formatter):
    """'[LEVEL] message' 形式のコンソール用フォーマッター"""

    def __init__(self, use_color: bool = False):
        super().__init__('%(message)s')
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        tag = f"[{record.levelname}]"
        if self.use_color:
            color = LEVEL_COLORS.get(record.levelno, '')
            tag = f"{color}{tag}{ANSI_RESET}"
        return f"{tag} {message}"


@dataclass
class LogConfig:
    """ログ設定"""
    console_level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_file: Optional[Path] = None
    verbose: bool = False
    use_color: bool = False


class ProgressLogger:
    """進捗表示とロギングを管理するクラス"""

    def __init__(self, config: LogConfig):
        self.config = config
        self.logger = self._setup_logger()
        self._start_time: Optional[datetime] = None

    def _setup_logger(self) -> logging.Logger:
        """ロガーのセットアップ"""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)

        # 既存のハンドラーをクリア
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        # コンソールハンドラー
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.config.console_level)
        console_handler.setFormatter(StatusFormatter(use_color=self.config.use_color))
        logger.addHandler(console_handler)

        # ファイルハンドラー（指定されている場合）
        if self.config.log_file:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.config.log_file, encoding='utf-8')
            file_handler.setLevel(self.config.file_level)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            logger.addHandler(file_handler)

        return logger

    def log_processing_start(self, root: Path):
        """処理開始時の表示"""
        self._start_time = datetime.now()
        self.logger.info("Google Photos Takeout Metadata Processor")
        self.logger.info("=" * 40)
        self.logger.info(f"Target directory: {root}")
        if self.config.log_file:
            self.logger.info(f"Log file: {self.config.log_file}")

    def log_folder_complete(self, result: FolderResult):
        """フォルダ単位のサマリー行"""
        message = (
            f"Completed processing {result.folder.name}: "
            f"{result.processed} images processed, "
            f"{result.metadata_attached} with metadata attached"
        )
        if result.failed:
            message += f", {result.failed} failed"
        self.log_success(message)

    def log_processing_complete(self, stats: ProcessingStats):
        """処理完了時のサマリー表示"""
        end_time = datetime.now()
        total_time = (end_time - self._start_time).total_seconds() if self._start_time else 0

        self.logger.info("=" * 40)
        self.logger.info(f"Archive folders: {stats.archive_folders_found}")
        self.logger.info(f"Photo folders: {stats.photo_folders_found}")
        self.logger.info(f"Images processed: {stats.images_processed}")
        self.logger.info(f"Metadata attached: {stats.metadata_attached}")
        if stats.files_failed:
            self.logger.info(f"Failed: {stats.files_failed}")
            for file_path, error_msg in stats.errors:
                self.logger.error(f"  - {file_path}: {error_msg}")
        self.logger.info(f"Elapsed: {total_time:.2f}s")

    def log_error(self, file_path: Optional[Path], error_message: str, exception: Optional[Exception] = None):
        """エラーログの詳細記録"""
        error_msg = f"{file_path}: {error_message}" if file_path else error_message

        if exception:
            error_msg += f" ({type(exception).__name__}: {exception})"

        self.logger.error(error_msg)

        # 詳細なスタックトレースはファイルログのみに記録
        if exception and self.config.log_file:
            self.logger.debug("Traceback:", exc_info=exception)

    def log_warning(self, message: str):
        """警告メッセージのログ"""
        self.logger.warning(message)

    def log_success(self, message: str):
        """成功メッセージのログ"""
        self.logger.log(SUCCESS, message)

    def log_status(self, message: str):
        """情報メッセージのログ"""
        self.logger.info(message)

    def log_debug(self, message: str):
        """デバッグメッセージのログ"""
        self.logger.debug(message)


def color_supported(stream=None) -> bool:
    """ANSIカラーを使うかどうか（NO_COLOR環境変数と端末判定）"""
    stream = stream or sys.stdout
    if os.environ.get('NO_COLOR'):
        return False
    return hasattr(stream, 'isatty') and stream.isatty()


def create_default_logger(verbose: bool = False, log_file: Optional[Path] = None,
                          use_color: bool = False) -> ProgressLogger:
    """デフォルトのロガーを作成"""
    config = LogConfig(
        console_level=logging.DEBUG if verbose else logging.INFO,
        file_level=logging.DEBUG,
        log_file=log_file,
        verbose=verbose,
        use_color=use_color
    )
    return ProgressLogger(config)


def get_default_log_file() -> Path:
    """デフォルトのログファイルパスを取得"""
    log_dir = Path.home() / '.takeout_metadata' / 'logs'
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return log_dir / f'takeout_metadata_{timestamp}.log'
