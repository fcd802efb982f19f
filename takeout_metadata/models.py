"""
データモデル定義

Takeout Metadata Processorで使用するデータクラスを定義します。
いずれも1回の実行中だけ存在し、永続化されません。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass
class ImageEntry:
    """フォルダ内で見つかった画像ファイル"""
    path: Path
    basename: str  # 拡張子を除いたファイル名（大文字小文字はそのまま）
    extension: str  # 先頭のドットを除いた拡張子

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class PhotoFolder:
    """画像とサイドカーJSONを含むフォルダ"""
    path: Path
    images: List[ImageEntry] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class SidecarMatch:
    """画像とサイドカーJSONの対応"""
    image: ImageEntry
    sidecar_path: Path
    convention: str  # 一致した命名規則（例: '<base>.suppl.json'）


@dataclass
class MetadataFieldSet:
    """
    メタデータエンジンに渡すフィールド代入の順序付き集合

    同じフィールドへの再代入は値を上書きします（後勝ち）。
    位置は最初に代入された時点のものが保持されます。
    """
    fields: Dict[str, str] = field(default_factory=dict)

    def set(self, name: str, value: str) -> None:
        self.fields[name] = value

    def get(self, name: str) -> Optional[str]:
        return self.fields.get(name)

    def items(self) -> List[Tuple[str, str]]:
        return list(self.fields.items())

    def to_exiftool_args(self) -> List[str]:
        """exiftoolの `-Tag=value` 形式の引数リストに変換"""
        return [f"-{name}={value}" for name, value in self.fields.items()]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


@dataclass
class FolderResult:
    """フォルダ単位の処理結果"""
    folder: Path
    output_folder: Path
    images_found: int = 0
    processed: int = 0
    metadata_attached: int = 0
    failed: int = 0
    errors: List[Tuple[Path, str]] = field(default_factory=list)


@dataclass
class ProcessingStats:
    """実行全体の処理統計情報"""
    archive_folders_found: int = 0
    photo_folders_found: int = 0
    folder_results: List[FolderResult] = field(default_factory=list)

    @property
    def images_found(self) -> int:
        return sum(r.images_found for r in self.folder_results)

    @property
    def images_processed(self) -> int:
        return sum(r.processed for r in self.folder_results)

    @property
    def metadata_attached(self) -> int:
        return sum(r.metadata_attached for r in self.folder_results)

    @property
    def files_failed(self) -> int:
        return sum(r.failed for r in self.folder_results)

    @property
    def errors(self) -> List[Tuple[Path, str]]:
        return [error for r in self.folder_results for error in r.errors]
