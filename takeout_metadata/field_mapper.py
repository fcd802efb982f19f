"""
メタデータフィールド変換モジュール

Google TakeoutのサイドカーJSONの各フィールドを、exiftoolで書き込む
メタデータフィールド（Title、DateTimeOriginal、GPSLatitude など）に変換します。
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from .models import MetadataFieldSet
from .sidecar_reader import SidecarReader


EXIF_DATETIME_FORMAT = '%Y:%m:%d %H:%M:%S'

# 位置情報なしを表す値
GPS_SENTINEL = 0.0


def format_timestamp(timestamp: Optional[str]) -> Optional[str]:
    """
    Unixエポック秒をローカル時刻の 'YYYY:MM:DD HH:MM:SS' に変換

    Args:
        timestamp: エポック秒（文字列）

    Returns:
        Exif形式の日時文字列（変換できない場合はNone）
    """
    if timestamp is None:
        return None

    try:
        seconds = int(timestamp)
    except ValueError:
        try:
            seconds = float(timestamp)
        except ValueError:
            return None

    try:
        return datetime.fromtimestamp(seconds).strftime(EXIF_DATETIME_FORMAT)
    except (OverflowError, OSError, ValueError):
        return None


def hemisphere_ref(value: str, positive: str, negative: str) -> Optional[str]:
    """
    座標の符号から半球の参照値（N/S、E/W）を決める

    exiftoolはGPSLatitude等に絶対値を書き込むため、南緯・西経はRefで表す。
    数値として解釈できない場合はNone。
    """
    try:
        return negative if float(value) < 0 else positive
    except ValueError:
        return None


def is_gps_sentinel(value: str) -> bool:
    """座標値が「位置情報なし」を表す 0.0 かどうか"""
    try:
        return float(value) == GPS_SENTINEL
    except ValueError:
        return False


class MetadataFieldMapper:
    """サイドカーJSONをメタデータフィールドに変換するクラス"""

    def __init__(self, reader: Optional[SidecarReader] = None, join_user_comments: bool = False):
        """
        MetadataFieldMapperを初期化

        Args:
            reader: JSONフィールド抽出に使うSidecarReader
            join_user_comments: Trueの場合、UserCommentの各メモを '; ' で連結する
                               （Falseでは最後に代入されたメモが残る）
        """
        self.reader = reader or SidecarReader()
        self.join_user_comments = join_user_comments
        self.logger = logging.getLogger(__name__)

    def map_fields(self, document: Dict[str, Any]) -> MetadataFieldSet:
        """
        サイドカーJSONからメタデータフィールドを生成

        各フィールドは独立しており、存在しないものは単に無視されます。

        Args:
            document: 解析済みのサイドカーJSON

        Returns:
            代入順に並んだメタデータフィールドの集合（空の場合あり）
        """
        query = self.reader.query_field
        fields = MetadataFieldSet()

        title = query(document, 'title')
        if title is not None:
            fields.set('Title', title)

        description = query(document, 'description')
        if description is not None:
            fields.set('Description', description)

        creation_date = format_timestamp(query(document, 'creationTime.timestamp'))
        if creation_date is not None:
            fields.set('CreateDate', creation_date)
            fields.set('DateTimeOriginal', creation_date)

        # 撮影日時は作成日時より優先（DateTimeOriginalを上書き）
        taken_date = format_timestamp(query(document, 'photoTakenTime.timestamp'))
        if taken_date is not None:
            fields.set('DateTimeOriginal', taken_date)

        self._map_gps(document, fields)

        comments = []
        image_views = query(document, 'imageViews')
        if image_views is not None:
            comments.append(f"Google Photos Views: {image_views}")

        url = query(document, 'url')
        if url is not None:
            comments.append(f"Google Photos URL: {url}")

        device_type = query(document, 'googlePhotosOrigin.mobileUpload.deviceType')
        if device_type is not None:
            comments.append(f"Device Type: {device_type}")

        if comments:
            if self.join_user_comments:
                fields.set('UserComment', '; '.join(comments))
            else:
                for comment in comments:
                    fields.set('UserComment', comment)

        self.logger.debug(f"Mapped {len(fields)} field(s): {', '.join(fields)}")
        return fields

    def _map_gps(self, document: Dict[str, Any], fields: MetadataFieldSet) -> None:
        """
        GPS座標を設定

        緯度・経度の両方が存在し、どちらも 0.0 でない場合のみ設定します。
        赤道と本初子午線の交点にある実際の位置も除外されます。
        """
        latitude = self.reader.query_field(document, 'geoData.latitude')
        longitude = self.reader.query_field(document, 'geoData.longitude')

        if latitude is None or longitude is None:
            return
        if is_gps_sentinel(latitude) or is_gps_sentinel(longitude):
            return

        fields.set('GPSLatitude', latitude)
        latitude_ref = hemisphere_ref(latitude, 'N', 'S')
        if latitude_ref:
            fields.set('GPSLatitudeRef', latitude_ref)
        fields.set('GPSLongitude', longitude)
        longitude_ref = hemisphere_ref(longitude, 'E', 'W')
        if longitude_ref:
            fields.set('GPSLongitudeRef', longitude_ref)

        altitude = self.reader.query_field(document, 'geoData.altitude')
        if altitude is not None and not is_gps_sentinel(altitude):
            fields.set('GPSAltitude', altitude)
