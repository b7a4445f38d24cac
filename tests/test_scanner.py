"""Tests for collecting JPEG files."""

import pytest
from pathlib import Path

from filmtag.scanner import is_jpeg, scan_directory, validate_files
from filmtag.errors import UnsupportedFileError


@pytest.fixture
def roll(tmp_path):
    """A scanned roll with a nested folder and some non-JPEG files."""
    (tmp_path / 'frame01.jpg').write_bytes(b'')
    (tmp_path / 'frame02.JPEG').write_bytes(b'')
    (tmp_path / 'frame03.tif').write_bytes(b'')
    (tmp_path / 'notes.txt').write_text('roll 1')
    nested = tmp_path / 'extras'
    nested.mkdir()
    (nested / 'frame04.jpeg').write_bytes(b'')
    return tmp_path


class TestIsJpeg:
    """Tests for JPEG detection."""

    def test_jpeg_extensions(self):
        assert is_jpeg('photo.jpg') is True
        assert is_jpeg('photo.jpeg') is True
        assert is_jpeg(Path('PHOTO.JPG')) is True
        assert is_jpeg('Photo.JpEg') is True

    def test_other_extensions(self):
        assert is_jpeg('photo.tif') is False
        assert is_jpeg('photo.png') is False
        assert is_jpeg('photo.dng') is False
        assert is_jpeg('photo') is False
        assert is_jpeg('jpg') is False


class TestScanDirectory:
    """Tests for scanning a directory."""

    def test_recursive(self, roll):
        files = scan_directory(roll)
        assert sorted(f.name for f in files) == ['frame01.jpg', 'frame02.JPEG', 'frame04.jpeg']

    def test_sorted(self, roll):
        files = scan_directory(roll)
        assert files == sorted(files)

    def test_non_recursive(self, roll):
        files = scan_directory(roll, recursive=False)
        assert sorted(f.name for f in files) == ['frame01.jpg', 'frame02.JPEG']

    def test_empty_directory(self, tmp_path):
        assert scan_directory(tmp_path) == []

    def test_not_a_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            scan_directory(tmp_path / 'missing')


class TestValidateFiles:
    """Tests for validating files before tagging."""

    def test_valid(self, roll):
        validate_files(scan_directory(roll))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match='file not found'):
            validate_files([tmp_path / 'gone.jpg'])

    def test_rejects_non_jpeg(self, roll):
        with pytest.raises(UnsupportedFileError, match=r'only JPEG supported'):
            validate_files([roll / 'frame01.jpg', roll / 'frame03.tif'])
