"""
Command-line interface for filmtag.
"""

import argparse
import sys
from typing import TextIO

from . import __version__
from .config import FilmtagConfig
from .errors import FilmtagError
from .gear import GearStore, GearConfig, CameraType
from .metadata import ExifToolWrapper
from .reports import TagLogger
from .tagger import FilmTagger


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='filmtag',
        description='Strip scanner EXIF data and apply film camera metadata to JPEG files using ExifTool',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  filmtag ./roll-001/

  # Strip scanner data only
  filmtag --clean ./scanned-negs/

  # Pick gear by name
  filmtag --camera "Contax T3" --film "Kodak Portra 400" ./roll-001/

  # Single file with an interchangeable-lens camera
  filmtag -f photo.jpg --camera "Minolta CLE" \\
    --lens "Leica APO-Summicron-M 35mm f/2 ASPH." --film "Kodak Portra 800"

Gear database:
  Cameras, lenses and film stocks are kept in gear.yaml in your config
  directory (override with --config or $FILMTAG_CONFIG). It is created
  with defaults on first run and grows as you enter gear manually.
"""
    )

    parser.add_argument(
        'directory',
        nargs='?',
        type=str,
        help='Directory of scanned JPEGs (searched recursively)'
    )

    gear_group = parser.add_argument_group('Gear Selection')
    gear_group.add_argument(
        '-c', '--camera',
        type=str,
        help="Camera name (e.g., 'Contax T3')"
    )
    gear_group.add_argument(
        '-l', '--lens',
        type=str,
        help='Lens name (for interchangeable lens cameras)'
    )
    gear_group.add_argument(
        '--film',
        type=str,
        help="Film stock name (e.g., 'Kodak Portra 400')"
    )

    mode_group = parser.add_argument_group('Operation Mode')
    mode_group.add_argument(
        '-f', '--file',
        type=str,
        metavar='FILE',
        help='Process single file instead of directory'
    )
    mode_group.add_argument(
        '--clean',
        action='store_true',
        default=False,
        help='Strip scanner EXIF data only (no film metadata)'
    )
    mode_group.add_argument(
        '-y', '--yes',
        action='store_true',
        default=False,
        help='Do not ask for confirmation'
    )
    mode_group.add_argument(
        '--dry-run',
        action='store_true',
        default=False,
        help='Show the exiftool commands without modifying files'
    )
    mode_group.add_argument(
        '--no-recursive',
        action='store_true',
        default=False,
        help='Do not scan subdirectories'
    )

    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument(
        '--config',
        type=str,
        metavar='PATH',
        help='Gear database file (default: <config dir>/filmtag/gear.yaml)'
    )
    config_group.add_argument(
        '--log-file',
        type=str,
        metavar='PATH',
        help='Also append all output to this file'
    )
    config_group.add_argument(
        '--list-gear',
        action='store_true',
        default=False,
        help='List cameras, lenses and film stocks, then exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        default=False,
        help='Verbose output'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def print_gear(gear: GearConfig, output: TextIO = sys.stdout):
    """Print the gear database in a readable form."""
    output.write("Cameras:\n")
    for key, camera in gear.cameras.items():
        output.write(f"  {key} [{camera.type.value}, {camera.film_format}]\n")
        if camera.type == CameraType.FIXED and camera.fixed_lens is not None:
            output.write(f"    - {camera.fixed_lens.label}\n")
        for lens in camera.compatible_lenses:
            output.write(f"    - {lens.label}\n")

    output.write("\nFilm stocks:\n")
    for film in gear.film_stocks:
        output.write(f"  {film.label}\n")


def main(argv=None):
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = FilmtagConfig.from_args(args)
    except Exception as e:
        print(f"Error creating configuration: {e}", file=sys.stderr)
        return 1

    if args.list_gear:
        try:
            gear = GearStore(config.resolved_gear_path).load()
        except (FilmtagError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print_gear(gear)
        return 0

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    try:
        with TagLogger(log_file=config.log_file, verbose=config.verbose) as logger:
            exiftool = ExifToolWrapper(logger=logger, dry_run=config.dry_run)
            store = GearStore(config.resolved_gear_path, logger=logger)
            tagger = FilmTagger(config, store, exiftool=exiftool, logger=logger)
            summary = tagger.run()

            if config.verbose:
                summary.write_summary(sys.stdout)
        return 0

    except (KeyboardInterrupt, EOFError):
        print("\nOperation cancelled by user.")
        return 130
    except (FilmtagError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
