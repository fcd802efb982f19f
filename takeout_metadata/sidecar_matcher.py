"""
サイドカーマッチングモジュール

画像ファイルに対応するGoogle TakeoutのサイドカーJSONを、
固定の命名規則を優先順位順に試して検索します。
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .models import ImageEntry, SidecarMatch


# (説明ラベル, 候補ファイル名の生成関数) の優先順位付きリスト
NamingConvention = Tuple[str, Callable[[ImageEntry], str]]

NAMING_CONVENTIONS: List[NamingConvention] = [
    ('<base>.suppl.json', lambda image: f"{image.basename}.suppl.json"),
    ('<base>.supplemental-metadata.json', lambda image: f"{image.basename}.supplemental-metadata.json"),
    ('<name.ext>.suppl.json', lambda image: f"{image.name}.suppl.json"),
    ('<name.ext>.supplemental-metadata.json', lambda image: f"{image.name}.supplemental-metadata.json"),
]


class SidecarMatcher:
    """画像ファイルとサイドカーJSONをマッチングするクラス"""

    def __init__(self, conventions: Optional[List[NamingConvention]] = None):
        """
        SidecarMatcherを初期化

        Args:
            conventions: 命名規則のリスト（省略時は標準の4規則）
        """
        self.conventions = conventions if conventions is not None else NAMING_CONVENTIONS
        self.logger = logging.getLogger(__name__)

    def candidate_paths(self, folder: Path, image: ImageEntry) -> List[Path]:
        """優先順位順の候補パスを返す"""
        return [folder / build(image) for _, build in self.conventions]

    def find_sidecar(self, folder: Path, image: ImageEntry) -> Optional[SidecarMatch]:
        """
        画像に対応するサイドカーJSONを検索

        最初に通常ファイルとして存在した候補を採用し、以降の候補は調べません。

        Args:
            folder: 画像を含むフォルダ
            image: 対象の画像

        Returns:
            マッチ結果（見つからない場合はNone）
        """
        for (label, _), candidate in zip(self.conventions, self.candidate_paths(folder, image)):
            try:
                exists = candidate.is_file()
            except OSError as e:
                # 名前が長すぎる候補などは存在しないものとして扱う
                self.logger.debug(f"Cannot check sidecar candidate {candidate.name}: {e}")
                continue
            if exists:
                self.logger.debug(f"Sidecar found: {image.name} -> {candidate.name} ({label})")
                return SidecarMatch(image=image, sidecar_path=candidate, convention=label)

        self.logger.debug(f"No sidecar for: {image.name}")
        return None

    @staticmethod
    def describe_conventions() -> List[str]:
        """ヘルプ表示用の命名規則の説明"""
        return [label for label, _ in NAMING_CONVENTIONS]
