"""Tests for the CLI module."""

import io
import subprocess

import pytest

from filmtag import cli
from filmtag.cli import create_parser, main, print_gear
from filmtag.gear import default_gear


class TestCreateParser:
    """Tests for argument parser creation."""

    @pytest.fixture
    def parser(self):
        """Create parser for testing."""
        return create_parser()

    def test_directory_is_optional(self, parser):
        args = parser.parse_args([])
        assert args.directory is None

    def test_directory(self, parser):
        args = parser.parse_args(['./roll-001/'])
        assert args.directory == './roll-001/'

    def test_gear_flags(self, parser):
        args = parser.parse_args([
            '-c', 'Minolta CLE',
            '-l', 'Canon 50mm f/1.4 LTM',
            '--film', 'Kodak Portra 800',
            'roll',
        ])
        assert args.camera == 'Minolta CLE'
        assert args.lens == 'Canon 50mm f/1.4 LTM'
        assert args.film == 'Kodak Portra 800'

    def test_long_gear_flags(self, parser):
        args = parser.parse_args(['--camera', 'Contax T3', '--lens', 'x', 'roll'])
        assert args.camera == 'Contax T3'
        assert args.lens == 'x'

    def test_file_flag(self, parser):
        args = parser.parse_args(['-f', 'photo.jpg'])
        assert args.file == 'photo.jpg'
        args = parser.parse_args(['--file', 'photo.jpg'])
        assert args.file == 'photo.jpg'

    def test_mode_flags(self, parser):
        args = parser.parse_args(['--clean', '--dry-run', '-y', '--no-recursive', 'roll'])
        assert args.clean is True
        assert args.dry_run is True
        assert args.yes is True
        assert args.no_recursive is True

    def test_mode_flag_defaults(self, parser):
        args = parser.parse_args(['roll'])
        assert args.clean is False
        assert args.dry_run is False
        assert args.yes is False
        assert args.no_recursive is False
        assert args.list_gear is False

    def test_config_flags(self, parser):
        args = parser.parse_args(['--config', 'gear.yaml', '--log-file', 'run.log', 'roll'])
        assert args.config == 'gear.yaml'
        assert args.log_file == 'run.log'

    def test_verbose_flag(self, parser):
        args = parser.parse_args(['-v', 'roll'])
        assert args.verbose is True

        args = parser.parse_args(['--verbose', 'roll'])
        assert args.verbose is True

    def test_version(self, parser, capsys):
        with pytest.raises(SystemExit):
            parser.parse_args(['--version'])
        assert 'filmtag' in capsys.readouterr().out


class TestPrintGear:
    """Tests for listing the gear database."""

    def test_print_gear(self):
        output = io.StringIO()
        print_gear(default_gear(), output)
        text = output.getvalue()

        assert 'Contax T3 [fixed, 35mm]' in text
        assert 'Mamiya 645E [medium_format, 120]' in text
        assert '- Carl Zeiss Sonnar T 35mm f/2.8 (35mm f/2.8)' in text
        assert 'Kodak Vision3 500T (ISO 500, 120)' in text


class FakeExifToolWrapper:
    """Replaces ExifToolWrapper in the CLI."""

    calls = []

    def __init__(self, logger=None, dry_run=False):
        self.logger = logger
        self.dry_run = dry_run

    def strip_scanner_metadata(self, files):
        FakeExifToolWrapper.calls.append(('strip', list(files)))
        return ''

    def apply_film_metadata(self, camera, lens, film, files):
        FakeExifToolWrapper.calls.append(('apply', camera.key, lens.name, film.name, list(files)))
        return ''


@pytest.fixture
def fake_exiftool(monkeypatch):
    FakeExifToolWrapper.calls = []
    monkeypatch.setattr(cli, 'ExifToolWrapper', FakeExifToolWrapper)
    return FakeExifToolWrapper


@pytest.fixture
def roll(tmp_path):
    roll = tmp_path / 'roll-001'
    roll.mkdir()
    (roll / 'frame01.jpg').write_bytes(b'')
    return roll


class TestMainFunction:
    """Tests for main CLI function."""

    def test_missing_directory(self, capsys):
        assert main([]) == 1
        assert 'directory path required' in capsys.readouterr().err

    def test_nonexistent_directory(self):
        assert main(['/nonexistent/path']) == 1

    def test_film_without_camera(self, roll):
        assert main(['--film', 'Kodak Portra 400', str(roll)]) == 1

    def test_list_gear(self, tmp_path, capsys):
        gear_path = tmp_path / 'gear.yaml'
        assert main(['--list-gear', '--config', str(gear_path)]) == 0
        assert gear_path.exists()
        assert 'Minolta CLE' in capsys.readouterr().out

    def test_list_gear_unwritable_config(self, tmp_path, capsys):
        blocker = tmp_path / 'not-a-dir'
        blocker.write_text('')

        result = main(['--list-gear', '--config', str(blocker / 'filmtag' / 'gear.yaml')])

        assert result == 1
        assert 'Error:' in capsys.readouterr().err

    def test_list_gear_invalid_utf8(self, tmp_path, capsys):
        gear_path = tmp_path / 'gear.yaml'
        gear_path.write_bytes(b'cameras: \xff\n')

        assert main(['--list-gear', '--config', str(gear_path)]) == 1
        assert 'Error:' in capsys.readouterr().err

    def test_flag_mode(self, roll, tmp_path, fake_exiftool):
        result = main([
            '--config', str(tmp_path / 'gear.yaml'),
            '-c', 'Contax T3', '--film', 'Kodak Portra 400', '-y', str(roll),
        ])

        assert result == 0
        assert fake_exiftool.calls[0] == ('strip', [roll / 'frame01.jpg'])
        assert fake_exiftool.calls[1][:4] == (
            'apply', 'Contax T3', 'Carl Zeiss Sonnar T 35mm f/2.8', 'Kodak Portra 400')

    def test_unknown_camera(self, roll, tmp_path, fake_exiftool, capsys):
        result = main([
            '--config', str(tmp_path / 'gear.yaml'),
            '-c', 'Leica M6', '--film', 'Kodak Portra 400', '-y', str(roll),
        ])

        assert result == 1
        assert 'camera not found: Leica M6' in capsys.readouterr().err
        assert fake_exiftool.calls == []

    def test_unsupported_file(self, tmp_path, fake_exiftool, capsys):
        scan = tmp_path / 'scan.png'
        scan.write_bytes(b'')

        result = main([
            '--config', str(tmp_path / 'gear.yaml'),
            '-f', str(scan), '-c', 'Contax T3', '--film', 'Kodak Gold 200', '-y',
        ])

        assert result == 1
        assert 'unsupported file type' in capsys.readouterr().err

    def test_cancelled_by_user(self, roll, tmp_path, fake_exiftool, monkeypatch):
        def interrupted(prompt=''):
            raise KeyboardInterrupt

        monkeypatch.setattr('builtins.input', interrupted)
        result = main(['--config', str(tmp_path / 'gear.yaml'), '--clean', str(roll)])

        assert result == 130
        assert fake_exiftool.calls == []

    def test_clean_with_log_file(self, roll, tmp_path, fake_exiftool):
        log_file = tmp_path / 'filmtag.log'
        result = main([
            '--config', str(tmp_path / 'gear.yaml'),
            '--log-file', str(log_file),
            '--clean', '-y', str(roll),
        ])

        assert result == 0
        assert fake_exiftool.calls == [('strip', [roll / 'frame01.jpg'])]
        assert 'Cleaned 1 files.' in log_file.read_text(encoding='utf-8')

    def test_exiftool_not_available(self, roll, tmp_path, monkeypatch, capsys):
        """Test error when exiftool is not available."""
        def mock_run(cmd, **kwargs):
            raise FileNotFoundError("exiftool not found")

        monkeypatch.setattr(subprocess, 'run', mock_run)

        result = main(['--config', str(tmp_path / 'gear.yaml'), str(roll)])
        assert result == 1
        assert "exiftool not found" in capsys.readouterr().err
