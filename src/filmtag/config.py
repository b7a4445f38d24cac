"""
Configuration handling for filmtag.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional, List
from pathlib import Path


# Only JPEG scans are tagged
JPEG_EXTENSIONS = {'.jpg', '.jpeg'}

# Closed set of film formats
FORMAT_35MM = '35mm'
FORMAT_120 = '120'
FILM_FORMATS = (FORMAT_35MM, FORMAT_120)

APP_NAME = 'filmtag'
GEAR_FILENAME = 'gear.yaml'

# Environment override for the gear file location
GEAR_PATH_ENV = 'FILMTAG_CONFIG'


def get_user_config_dir() -> Path:
    """Return the per-user configuration directory for this platform."""
    if sys.platform.startswith('win'):
        appdata = os.environ.get('APPDATA')
        if appdata:
            return Path(appdata)
        return Path.home() / 'AppData' / 'Roaming'
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support'
    xdg = os.environ.get('XDG_CONFIG_HOME')
    if xdg:
        return Path(xdg)
    return Path.home() / '.config'


def get_default_gear_path() -> Path:
    """
    Get the path of the gear database.

    $FILMTAG_CONFIG wins; otherwise <user config dir>/filmtag/gear.yaml.
    """
    override = os.environ.get(GEAR_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return get_user_config_dir() / APP_NAME / GEAR_FILENAME


@dataclass
class FilmtagConfig:
    """Configuration for a filmtag run."""

    # Directory to scan, or a single file
    path: Optional[Path] = None
    file_path: Optional[Path] = None

    # Gear selection by name (flag mode)
    camera: Optional[str] = None
    lens: Optional[str] = None
    film: Optional[str] = None

    # Operation mode
    clean: bool = False  # Strip scanner metadata only
    dry_run: bool = False  # Show exiftool commands without running them
    assume_yes: bool = False  # Skip the confirmation prompt

    # Scanning
    recursive: bool = True

    # Gear database and logging
    gear_path: Optional[Path] = None
    log_file: Optional[Path] = None

    # Verbosity
    verbose: bool = False

    @property
    def mode(self) -> str:
        """Run mode: 'clean', 'flags' or 'interactive'."""
        if self.clean:
            return 'clean'
        if self.camera:
            return 'flags'
        return 'interactive'

    @property
    def interactive(self) -> bool:
        """Whether gear is picked from menus."""
        return self.mode == 'interactive'

    @property
    def resolved_gear_path(self) -> Path:
        return self.gear_path if self.gear_path else get_default_gear_path()

    def validate(self) -> List[str]:
        """Validate configuration and return list of error messages."""
        errors = []

        if self.file_path is None:
            if self.path is None:
                errors.append("directory path required")
            elif not self.path.exists():
                errors.append(f"Path does not exist: {self.path}")
            elif not self.path.is_dir():
                errors.append(f"Not a directory: {self.path} (use --file for a single file)")

        if (self.lens or self.film) and not self.camera and not self.clean:
            errors.append("--lens and --film require --camera")

        if self.clean and (self.camera or self.lens or self.film):
            errors.append("--clean cannot be combined with --camera, --lens or --film")

        return errors

    @classmethod
    def from_args(cls, args) -> 'FilmtagConfig':
        """Create config from argparse namespace."""
        path = getattr(args, 'directory', None)
        file_path = getattr(args, 'file', None)
        gear_path = getattr(args, 'config', None)
        log_file = getattr(args, 'log_file', None)

        return cls(
            path=Path(path) if path else None,
            file_path=Path(file_path) if file_path else None,
            camera=getattr(args, 'camera', None) or None,
            lens=getattr(args, 'lens', None) or None,
            film=getattr(args, 'film', None) or None,
            clean=getattr(args, 'clean', False),
            dry_run=getattr(args, 'dry_run', False),
            assume_yes=getattr(args, 'yes', False),
            recursive=not getattr(args, 'no_recursive', False),
            gear_path=Path(gear_path).expanduser() if gear_path else None,
            log_file=Path(log_file) if log_file else None,
            verbose=getattr(args, 'verbose', False),
        )
