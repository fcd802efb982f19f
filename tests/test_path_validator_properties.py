"""
PathValidatorのテスト
"""

import os
import tempfile
from pathlib import Path
import pytest

from takeout_metadata.exceptions import ValidationError
from takeout_metadata.path_validator import PathValidator


def test_existing_directory_is_valid():
    with tempfile.TemporaryDirectory() as temp_dir:
        PathValidator.validate_directory(Path(temp_dir))


def test_missing_directory_raises():
    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(ValidationError, match='does not exist'):
            PathValidator.validate_directory(Path(temp_dir) / 'missing')


def test_file_is_not_a_directory():
    with tempfile.TemporaryDirectory() as temp_dir:
        file_path = Path(temp_dir) / 'Takeout.zip'
        file_path.write_bytes(b'zip')

        with pytest.raises(ValidationError, match='Not a directory'):
            PathValidator.validate_directory(file_path)


def test_normalize_path_is_absolute():
    with tempfile.TemporaryDirectory() as temp_dir:
        cwd = os.getcwd()
        try:
            os.chdir(temp_dir)
            normalized = PathValidator.normalize_path('.')
        finally:
            os.chdir(cwd)

        assert normalized.is_absolute()
        assert normalized == Path(temp_dir).resolve()
