"""
Console logging and run summaries for filmtag.
"""

from pathlib import Path
from datetime import datetime
from typing import Optional, TextIO
from dataclasses import dataclass, field

from . import __version__


@dataclass
class TagSummary:
    """Outcome of a single filmtag run."""
    mode: str  # 'interactive', 'flags', 'clean'
    status: str  # 'success', 'cancelled', 'dry_run'
    file_count: int = 0
    camera: Optional[str] = None
    lens: Optional[str] = None
    film: Optional[str] = None
    run_timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    tool_version: str = __version__

    @property
    def succeeded(self) -> bool:
        return self.status in ('success', 'dry_run')

    def write_summary(self, output: TextIO):
        """Write a human-readable summary to the output stream."""
        output.write("=" * 60 + "\n")
        output.write("FILMTAG SUMMARY\n")
        output.write("=" * 60 + "\n")
        output.write(f"Run Time:      {self.run_timestamp}\n")
        output.write(f"Tool Version:  {self.tool_version}\n")
        output.write(f"Mode:          {self.mode}\n")
        output.write(f"Status:        {self.status}\n")
        if self.camera:
            output.write(f"Camera:        {self.camera}\n")
        if self.lens:
            output.write(f"Lens:          {self.lens}\n")
        if self.film:
            output.write(f"Film:          {self.film}\n")
        output.write(f"Files:         {self.file_count}\n")


class TagLogger:
    """
    Logger for filmtag runs.

    Writes to the console and, optionally, mirrors every line to a log file.
    """

    def __init__(self, log_file: Optional[Path] = None, verbose: bool = False):
        """
        Initialize the logger.

        Args:
            log_file: Optional path to log file
            verbose: If True, print verbose messages to console
        """
        self.verbose = verbose
        self.log_file = log_file
        self._file_handle: Optional[TextIO] = None

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._file_handle = open(log_file, 'a', encoding='utf-8')
            self._file_handle.write(f"--- filmtag {__version__} run at {datetime.now().isoformat()} ---\n")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the log file if open."""
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None

    def _write(self, message: str, console: bool = True, file: bool = True):
        """Write message to console and/or file."""
        if console:
            print(message)
        if file and self._file_handle:
            self._file_handle.write(message + '\n')
            self._file_handle.flush()

    def info(self, message: str):
        self._write(message)

    def verbose_info(self, message: str):
        """Log a verbose message (only shown if verbose mode is on)."""
        if self.verbose:
            self._write(message)
        elif self._file_handle:
            self._write(message, console=False, file=True)

    def warning(self, message: str):
        self._write(f"WARNING: {message}")

    def error(self, message: str):
        self._write(f"ERROR: {message}")

    def section(self, title: str):
        """Log a section header."""
        self._write(f"\n{'='*60}")
        self._write(title)
        self._write('='*60)
