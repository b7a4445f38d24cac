"""
Collecting JPEG scans to tag.
"""

from pathlib import Path
from typing import List, Iterable

from .config import JPEG_EXTENSIONS
from .errors import UnsupportedFileError


def is_jpeg(filepath) -> bool:
    """Check the extension, case-insensitively."""
    return Path(filepath).suffix.lower() in JPEG_EXTENSIONS


def scan_directory(path: Path, recursive: bool = True) -> List[Path]:
    """
    Scan a directory for JPEG files.

    Args:
        path: Directory to scan
        recursive: If True, include subdirectories

    Returns:
        Sorted list of file paths
    """
    path = Path(path)
    if not path.is_dir():
        raise NotADirectoryError(f"not a directory: {path}")

    pattern = '**/*' if recursive else '*'
    files = [
        filepath for filepath in path.glob(pattern)
        if filepath.is_file() and is_jpeg(filepath)
    ]
    return sorted(files)


def validate_files(files: Iterable[Path]):
    """
    Make sure every file exists and is a JPEG.

    Raises:
        FileNotFoundError: For a missing file
        UnsupportedFileError: For anything that is not a JPEG
    """
    for filepath in files:
        if not Path(filepath).exists():
            raise FileNotFoundError(f"file not found: {filepath}")
        if not is_jpeg(filepath):
            raise UnsupportedFileError(f"unsupported file type: {filepath} (only JPEG supported)")
