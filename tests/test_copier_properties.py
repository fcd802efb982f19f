"""
Copierのプロパティベーステスト

画像コピーがバイト単位で一致し、既存ファイルを上書きすることを検証します。
"""

import hashlib
import tempfile
from pathlib import Path
from unittest.mock import patch
from hypothesis import given, strategies as st
from hypothesis import settings
import pytest

from takeout_metadata.copier import Copier
from takeout_metadata.exceptions import FileOperationError


def calculate_file_hash(file_path: Path) -> str:
    """ファイルのハッシュ値を計算"""
    return hashlib.sha256(file_path.read_bytes()).hexdigest()


@settings(max_examples=50)
@given(
    basename=st.text(
        alphabet=st.characters(whitelist_categories=('Lu', 'Ll', 'Nd'), min_codepoint=48, max_codepoint=122),
        min_size=1,
        max_size=20
    ),
    content=st.binary(min_size=0, max_size=10000),
    extension=st.sampled_from(['.jpg', '.JPG', '.png', '.heic', '.gif'])
)
def test_copy_preserves_bytes_property(basename, content, extension):
    """
    **Feature: takeout-metadata, Property 10: コピーの保存性**

    任意の画像ファイルに対して、出力フォルダのコピーは同じ名前で
    元ファイルとバイト単位で一致し、元ファイルは変更されないべきである。
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        source_dir = Path(temp_dir) / 'Photos from 2023'
        output_dir = Path(temp_dir) / 'Photos from 2023 output'
        source_dir.mkdir()
        output_dir.mkdir()

        source = source_dir / f"{basename}{extension}"
        source.write_bytes(content)
        original_hash = calculate_file_hash(source)

        status, error = Copier().copy_image(source, output_dir)

        assert status == 'success'
        assert error is None
        copy = output_dir / source.name
        assert copy.read_bytes() == content
        assert calculate_file_hash(source) == original_hash


def test_existing_copy_is_overwritten():
    with tempfile.TemporaryDirectory() as temp_dir:
        source_dir = Path(temp_dir) / 'src'
        output_dir = Path(temp_dir) / 'out'
        source_dir.mkdir()
        output_dir.mkdir()
        (source_dir / 'IMG_1.JPG').write_bytes(b'new')
        (output_dir / 'IMG_1.JPG').write_bytes(b'old contents')

        status, _ = Copier().copy_image(source_dir / 'IMG_1.JPG', output_dir)

        assert status == 'success'
        assert (output_dir / 'IMG_1.JPG').read_bytes() == b'new'


def test_missing_source_fails():
    with tempfile.TemporaryDirectory() as temp_dir:
        status, error = Copier().copy_image(Path(temp_dir) / 'gone.jpg', Path(temp_dir))

        assert status == 'failed'
        assert 'does not exist' in error


def test_os_error_is_reported_not_raised():
    with tempfile.TemporaryDirectory() as temp_dir:
        source = Path(temp_dir) / 'IMG_1.JPG'
        source.write_bytes(b'x')
        output_dir = Path(temp_dir) / 'out'
        output_dir.mkdir()

        with patch('takeout_metadata.copier.shutil.copy2', side_effect=OSError(28, 'No space left on device')):
            status, error = Copier().copy_image(source, output_dir)

        assert status == 'failed'
        assert 'No space left on device' in error


def test_permission_error_is_reported():
    with tempfile.TemporaryDirectory() as temp_dir:
        source = Path(temp_dir) / 'IMG_1.JPG'
        source.write_bytes(b'x')

        with patch('takeout_metadata.copier.shutil.copy2', side_effect=PermissionError('denied')):
            status, error = Copier().copy_image(source, Path(temp_dir))

        assert status == 'failed'
        assert error.startswith('permission denied')


def test_ensure_output_folder_is_idempotent():
    with tempfile.TemporaryDirectory() as temp_dir:
        output_dir = Path(temp_dir) / 'Photos from 2023 output'
        copier = Copier()

        copier.ensure_output_folder(output_dir)
        (output_dir / 'keep.jpg').write_bytes(b'k')
        copier.ensure_output_folder(output_dir)

        assert (output_dir / 'keep.jpg').exists()


def test_ensure_output_folder_failure_raises():
    with tempfile.TemporaryDirectory() as temp_dir:
        blocker = Path(temp_dir) / 'Photos from 2023 output'
        blocker.write_bytes(b'not a directory')

        with pytest.raises(FileOperationError):
            Copier().ensure_output_folder(blocker / 'child')
