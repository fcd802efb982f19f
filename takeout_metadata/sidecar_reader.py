"""
サイドカーJSON読み取りモジュール

Google TakeoutのサイドカーJSONを読み込み、ドット区切りのパスで値を取り出します。
読み込みに失敗した場合は「フィールドなし」として扱い、処理は継続します。
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import SidecarReadError


class SidecarReader:
    """サイドカーJSONの読み取りとフィールド抽出を行うクラス"""

    def __init__(self):
        """SidecarReaderを初期化"""
        self.logger = logging.getLogger(__name__)

    def load(self, sidecar_path: Path) -> Dict[str, Any]:
        """
        サイドカーJSONを読み込む

        読み込めない場合は警告を出して空のドキュメントを返します。

        Args:
            sidecar_path: サイドカーJSONのパス

        Returns:
            JSONオブジェクト（失敗時は空の辞書）
        """
        try:
            return self.load_strict(sidecar_path)
        except SidecarReadError as e:
            self.logger.warning(f"Could not read sidecar {sidecar_path.name}: {e}")
            return {}

    def load_strict(self, sidecar_path: Path) -> Dict[str, Any]:
        """
        サイドカーJSONを読み込む（失敗時は例外）

        Raises:
            SidecarReadError: 読み込みまたは解析に失敗した場合
        """
        try:
            with open(sidecar_path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise SidecarReadError(f"read failed: {e}") from e
        except (ValueError, RecursionError) as e:
            # JSONDecodeErrorはValueErrorのサブクラス、深すぎるネストはRecursionError
            raise SidecarReadError(f"invalid JSON: {type(e).__name__}: {e}") from e

        if not isinstance(document, dict):
            raise SidecarReadError(f"top-level value is {type(document).__name__}, expected object")

        return document

    def query_field(self, document: Dict[str, Any], dotted_path: str) -> Optional[str]:
        """
        ドット区切りパスの値を文字列として取り出す

        キーが無い、途中がオブジェクトでない、値がnull・false・空文字列の
        いずれかの場合はNoneを返します。

        Args:
            document: JSONドキュメント
            dotted_path: 'geoData.latitude' のようなパス

        Returns:
            値の文字列表現（存在しない場合はNone）
        """
        value: Any = document
        for key in dotted_path.split('.'):
            if not isinstance(value, dict) or key not in value:
                return None
            value = value[key]

        if value is None or value is False or value == '':
            return None

        return self._render(value)

    @staticmethod
    def _render(value: Any) -> str:
        """JSON値をテキストに変換（数値はJSON表記のまま）"""
        if isinstance(value, str):
            return value
        if isinstance(value, (bool, dict, list)):
            return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
        return str(value)
