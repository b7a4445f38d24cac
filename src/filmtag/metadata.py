"""
Metadata handling for EXIF operations.

All reading and writing is delegated to exiftool.
"""

import shlex
import subprocess
from pathlib import Path
from typing import List, Sequence, Optional

from .errors import ExifToolError
from .gear import Camera, Lens, FilmStock


EXIFTOOL = 'exiftool'

# Seconds allowed for a single exiftool run over a whole batch
EXIFTOOL_TIMEOUT = 600

# Keep the file modification date when rewriting
PRESERVE_ARGS = ['-overwrite_original', '-P']

INSTALL_HINT = (
    "exiftool not found in PATH. Please install it:\n"
    "  Ubuntu/Debian: sudo apt-get install libimage-exiftool-perl\n"
    "  macOS: brew install exiftool\n"
    "  Windows: Download from https://exiftool.org/"
)


def build_strip_args(files: Sequence[Path]) -> List[str]:
    """
    Arguments that remove all metadata except the ICC colour profile.
    """
    args = [
        '-all=',
        '-tagsfromfile', '@', '-icc_profile',
    ]
    args.extend(PRESERVE_ARGS)
    args.extend(str(f) for f in files)
    return args


def build_apply_args(camera: Camera, lens: Lens, film: FilmStock,
                     files: Sequence[Path]) -> List[str]:
    """
    Arguments that write camera, lens and film metadata.

    The film stock name goes into UserComment since EXIF has no film tag.
    """
    args = [
        f'-make={camera.make}',
        f'-model={camera.model}',
        f'-lensmodel={lens.name}',
        f'-focallength={lens.focal_length:d}',
        f'-maxaperturevalue={lens.max_aperture:.1f}',
        f'-iso={film.iso:d}',
        f'-usercomment={film.name}',
    ]
    args.extend(PRESERVE_ARGS)
    args.extend(str(f) for f in files)
    return args


class ExifToolWrapper:
    """Wrapper for exiftool command-line operations."""

    def __init__(self, logger=None, dry_run: bool = False, check: bool = True):
        self.logger = logger
        self.dry_run = dry_run
        self.version: Optional[str] = None
        if check:
            self._check_exiftool()

    def _verbose(self, message: str):
        if self.logger is not None:
            self.logger.verbose_info(message)

    def _check_exiftool(self):
        """Verify exiftool is installed."""
        try:
            result = subprocess.run(
                [EXIFTOOL, '-ver'],
                capture_output=True,
                text=True,
                timeout=10
            )
        except FileNotFoundError:
            raise ExifToolError(INSTALL_HINT)
        except subprocess.TimeoutExpired:
            raise ExifToolError("exiftool check timed out")

        if result.returncode != 0:
            raise ExifToolError(f"exiftool test failed: exit code {result.returncode}")
        self.version = result.stdout.strip()
        self._verbose(f"Using exiftool {self.version}")

    def execute(self, args: List[str]) -> str:
        """
        Run exiftool with the given arguments.

        Returns:
            exiftool's standard output ('' in dry-run mode)

        Raises:
            ExifToolError: If exiftool cannot be run or exits non-zero
        """
        cmd = [EXIFTOOL] + list(args)

        if self.dry_run:
            if self.logger is not None:
                self.logger.info(f"[DRY RUN] {shlex.join(cmd)}")
            return ''

        self._verbose(f"Running: {shlex.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=EXIFTOOL_TIMEOUT
            )
        except FileNotFoundError:
            raise ExifToolError(INSTALL_HINT)
        except subprocess.TimeoutExpired:
            raise ExifToolError(f"exiftool timed out after {EXIFTOOL_TIMEOUT}s")

        for line in result.stdout.splitlines():
            if line.strip():
                self._verbose(f"  exiftool: {line.strip()}")

        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip()
            raise ExifToolError(f"exiftool exited with code {result.returncode}: {detail}")

        # exiftool reports minor problems on stderr and still exits 0
        if self.logger is not None:
            for line in result.stderr.splitlines():
                if line.strip():
                    self.logger.warning(f"exiftool: {line.strip()}")

        return result.stdout

    def strip_scanner_metadata(self, files: Sequence[Path]) -> str:
        """Remove scanner metadata, keeping only the colour profile."""
        return self.execute(build_strip_args(files))

    def apply_film_metadata(self, camera: Camera, lens: Lens, film: FilmStock,
                            files: Sequence[Path]) -> str:
        """Write the camera, lens and film metadata."""
        return self.execute(build_apply_args(camera, lens, film, files))
