# Takeout Metadata Processor
# Re-attach Google Photos sidecar JSON metadata to images from Takeout archives

__version__ = '1.0.0'

from .models import (
    ImageEntry, PhotoFolder, SidecarMatch, MetadataFieldSet, FolderResult, ProcessingStats
)
from .exceptions import (
    ProcessingError, ValidationError, ToolNotFoundError, FileOperationError,
    SidecarReadError, MetadataWriteError
)
from .path_validator import PathValidator
from .file_scanner import FileScanner
from .sidecar_matcher import SidecarMatcher
from .sidecar_reader import SidecarReader
from .field_mapper import MetadataFieldMapper
from .exiftool_writer import MetadataWriter, ExifToolWriter
from .copier import Copier
from .logger import ProgressLogger, LogConfig, create_default_logger, get_default_log_file
from .folder_processor import FolderProcessor
from .directory_walker import DirectoryWalker

__all__ = [
    'ImageEntry',
    'PhotoFolder',
    'SidecarMatch',
    'MetadataFieldSet',
    'FolderResult',
    'ProcessingStats',
    'ProcessingError',
    'ValidationError',
    'ToolNotFoundError',
    'FileOperationError',
    'SidecarReadError',
    'MetadataWriteError',
    'PathValidator',
    'FileScanner',
    'SidecarMatcher',
    'SidecarReader',
    'MetadataFieldMapper',
    'MetadataWriter',
    'ExifToolWriter',
    'Copier',
    'ProgressLogger',
    'LogConfig',
    'create_default_logger',
    'get_default_log_file',
    'FolderProcessor',
    'DirectoryWalker'
]
