"""
ExifToolWriterのテスト

exiftoolの検出、書き込みコマンドの組み立て、失敗時の扱いを
subprocessをモックして検証します。
"""

import subprocess
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch
import pytest

from takeout_metadata.exceptions import ToolNotFoundError
from takeout_metadata.exiftool_writer import ExifToolWriter
from takeout_metadata.models import MetadataFieldSet


EXIFTOOL = Path('/usr/local/bin/exiftool')


def _completed(returncode=0, stdout='', stderr=''):
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


@pytest.fixture
def writer():
    """バージョン確認が成功するExifToolWriter"""
    with patch('takeout_metadata.exiftool_writer.subprocess.run', return_value=_completed(stdout='12.76\n')):
        yield ExifToolWriter(exiftool_path=EXIFTOOL)


def _fields():
    fields = MetadataFieldSet()
    fields.set('Title', 'Sunset')
    fields.set('DateTimeOriginal', '2023:07:22 04:26:40')
    return fields


class TestAvailability:
    """exiftoolの検出テスト"""

    def test_found_on_path(self):
        with patch('takeout_metadata.exiftool_writer.shutil.which', return_value=str(EXIFTOOL)), \
             patch('takeout_metadata.exiftool_writer.subprocess.run', return_value=_completed(stdout='12.76\n')) as run:
            writer = ExifToolWriter()

        assert writer.exiftool_path == EXIFTOOL
        assert writer.version == '12.76'
        assert run.call_args[0][0] == [str(EXIFTOOL), '-ver']

    def test_missing_tool_raises(self):
        with patch('takeout_metadata.exiftool_writer.shutil.which', return_value=None), \
             patch('takeout_metadata.exiftool_writer.Path.exists', return_value=False):
            with pytest.raises(ToolNotFoundError) as excinfo:
                ExifToolWriter()

        assert 'exiftool is not installed' in str(excinfo.value)

    def test_unrunnable_tool_raises(self):
        with patch('takeout_metadata.exiftool_writer.subprocess.run', side_effect=FileNotFoundError()):
            with pytest.raises(ToolNotFoundError):
                ExifToolWriter(exiftool_path=Path('/nonexistent/exiftool'))

    def test_version_check_failure_raises(self):
        with patch('takeout_metadata.exiftool_writer.subprocess.run', return_value=_completed(returncode=1)):
            with pytest.raises(ToolNotFoundError):
                ExifToolWriter(exiftool_path=EXIFTOOL)


class TestWriteFields:
    """書き込みのテスト"""

    def test_single_batched_invocation(self, writer):
        image = Path('/takeout/Photos from 2023 output/IMG_1.JPG')
        with patch('takeout_metadata.exiftool_writer.subprocess.run', return_value=_completed()) as run:
            assert writer.write_fields(image, _fields()) is True

        run.assert_called_once()
        assert run.call_args[0][0] == [
            str(EXIFTOOL),
            '-overwrite_original',
            '-Title=Sunset',
            '-DateTimeOriginal=2023:07:22 04:26:40',
            str(image),
        ]
        assert run.call_args[1]['timeout'] is None

    def test_nonzero_exit_returns_false(self, writer):
        with patch('takeout_metadata.exiftool_writer.subprocess.run',
                   return_value=_completed(returncode=1, stderr='Error: Not a valid JPG')):
            assert writer.write_fields(Path('broken.jpg'), _fields()) is False

    def test_timeout_returns_false(self, writer):
        writer.timeout = 5
        with patch('takeout_metadata.exiftool_writer.subprocess.run',
                   side_effect=subprocess.TimeoutExpired(cmd='exiftool', timeout=5)):
            assert writer.write_fields(Path('slow.jpg'), _fields()) is False

    def test_os_error_returns_false(self, writer):
        with patch('takeout_metadata.exiftool_writer.subprocess.run', side_effect=OSError('gone')):
            assert writer.write_fields(Path('a.jpg'), _fields()) is False

    def test_empty_fields_not_written(self, writer):
        with patch('takeout_metadata.exiftool_writer.subprocess.run') as run:
            assert writer.write_fields(Path('a.jpg'), MetadataFieldSet()) is False

        run.assert_not_called()

    def test_output_is_decoded_leniently(self, writer):
        with patch('takeout_metadata.exiftool_writer.subprocess.run', return_value=_completed()) as run:
            writer.write_fields(Path('a.jpg'), _fields())

        assert run.call_args[1]['errors'] == 'replace'


@pytest.mark.skipif(sys.platform == 'win32', reason="シェルスクリプトを使用")
class TestRealProcess:
    """実際の子プロセスを使ったテスト"""

    FAKE_EXIFTOOL = (
        "#!/bin/sh\n"
        "if [ \"$1\" = \"-ver\" ]; then echo 12.76; exit 0; fi\n"
        "printf 'Error: File not found - caf\\351.jpg\\n' >&2\n"
        "exit 1\n"
    )

    def test_undecodable_stderr_is_write_failure(self):
        """UTF-8として不正なファイル名がstderrに出ても例外にならない"""
        with tempfile.TemporaryDirectory() as temp_dir:
            tool = Path(temp_dir) / 'exiftool'
            tool.write_text(self.FAKE_EXIFTOOL, encoding='utf-8')
            tool.chmod(0o755)

            writer = ExifToolWriter(exiftool_path=tool)

            assert writer.version == '12.76'
            assert writer.write_fields(Path(temp_dir) / 'caf.jpg', _fields()) is False
