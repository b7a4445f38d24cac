"""
Main filmtag logic that coordinates all modules.
"""

from pathlib import Path
from typing import Optional, List

from .config import FilmtagConfig, FORMAT_120
from .errors import NoFilesError, ExifToolError
from .gear import GearStore, GearConfig, Camera, CameraType, Lens, FilmStock
from .metadata import ExifToolWrapper
from .prompts import Prompter
from .reports import TagLogger, TagSummary
from .scanner import scan_directory, validate_files


MANUAL_CAMERA_LABEL = "Other (manual entry)"
MANUAL_LENS_LABEL = "Manual entry"
MANUAL_FILM_LABEL = "Other (manual entry)"


class FilmTagger:
    """
    Strips scanner metadata from JPEG scans and writes camera, lens and
    film metadata in its place.
    """

    def __init__(self, config: FilmtagConfig, gear_store: GearStore,
                 exiftool: Optional[ExifToolWrapper] = None,
                 prompter: Optional[Prompter] = None,
                 logger: Optional[TagLogger] = None):
        """
        Initialize the tagger.

        Args:
            config: Configuration for the run
            gear_store: Where the gear database is loaded from and saved to
            exiftool: exiftool wrapper (created on demand if not given)
            prompter: Terminal prompts for interactive mode and confirmation
            logger: Console/file logger
        """
        self.config = config
        self.gear_store = gear_store
        self.logger = logger or TagLogger(verbose=config.verbose)
        self.prompter = prompter or Prompter()
        self._exiftool = exiftool
        self._gear: Optional[GearConfig] = None

    @property
    def exiftool(self) -> ExifToolWrapper:
        if self._exiftool is None:
            self._exiftool = ExifToolWrapper(logger=self.logger, dry_run=self.config.dry_run)
        return self._exiftool

    @property
    def gear(self) -> GearConfig:
        if self._gear is None:
            self._gear = self.gear_store.load()
            for problem in self._gear.validate():
                self.logger.warning(f"{self.gear_store.path}: {problem}")
        return self._gear

    @property
    def source_label(self) -> str:
        return str(self.config.file_path or self.config.path)

    def _save_gear(self):
        self.gear_store.save(self.gear)
        self.logger.verbose_info(f"Saved gear to {self.gear_store.path}")

    def collect_files(self) -> List[Path]:
        """
        Collect the files to tag: the single --file, or the JPEGs in the directory.

        Raises:
            NoFilesError: If nothing was found
        """
        if self.config.file_path is not None:
            return [self.config.file_path]

        files = scan_directory(self.config.path, recursive=self.config.recursive)
        if not files:
            raise NoFilesError(f"no JPEG files found in {self.config.path}")
        return files

    # Interactive selection

    def select_camera(self) -> Camera:
        """Pick a camera from the database, or enter a new one."""
        cameras = list(self.gear.cameras.values())
        labels = [camera.label for camera in cameras] + [MANUAL_CAMERA_LABEL]

        index = self.prompter.choose("📷 Select Camera:", labels)
        if index < len(cameras):
            return cameras[index]

        make = self.prompter.ask_text("📝 Enter camera make: ")
        model = self.prompter.ask_text("📝 Enter camera model: ")
        existing = self.gear.cameras.get(f"{make} {model}")
        if existing is not None:
            self.logger.warning(f"{existing.key} is already in the gear database, using it")
            return existing

        if self.prompter.confirm("Does this camera have a fixed lens?", default=True):
            camera = Camera(make=make, model=model, type=CameraType.FIXED,
                            fixed_lens=self._enter_lens())
        elif self.prompter.confirm("Does it take 120 film?", default=False):
            camera = Camera(make=make, model=model, type=CameraType.MEDIUM_FORMAT)
        else:
            camera = Camera(make=make, model=model, type=CameraType.INTERCHANGEABLE)

        self.gear.add_camera(camera)
        self._save_gear()
        return camera

    def _enter_lens(self) -> Lens:
        name = self.prompter.ask_text("📝 Enter lens name: ")
        focal_length = self.prompter.ask_int("📝 Enter focal length (mm): ")
        max_aperture = self.prompter.ask_float("📝 Enter max aperture (f-number): ")
        return Lens(name=name, focal_length=focal_length, max_aperture=max_aperture)

    def select_lens(self, camera: Camera) -> Lens:
        """Pick a lens for the camera. Fixed-lens cameras skip the menu."""
        if camera.type == CameraType.FIXED and camera.fixed_lens is not None:
            return camera.fixed_lens

        lenses = list(camera.compatible_lenses)
        labels = [lens.label for lens in lenses] + [MANUAL_LENS_LABEL]

        index = self.prompter.choose(f"🔍 Select Lens for {camera.model}:", labels)
        if index < len(lenses):
            return lenses[index]

        lens = self._enter_lens()
        if self.gear.add_lens(camera.key, lens):
            self._save_gear()
        return lens

    def select_film(self, camera: Camera) -> FilmStock:
        """Pick a film stock matching the camera's format."""
        film_format = camera.film_format
        films = self.gear.films_for_format(film_format)
        labels = [film.label for film in films] + [MANUAL_FILM_LABEL]

        index = self.prompter.choose("🎬 Select Film Stock:", labels)
        if index < len(films):
            return films[index]

        name = self.prompter.ask_text("📝 Enter film name: ")
        iso = self.prompter.ask_int("📝 Enter ISO speed: ")
        film = FilmStock(name=name, iso=iso, format=film_format)
        self.gear.add_film(film)
        self._save_gear()
        return film

    def confirm_configuration(self, camera: Camera, lens: Lens, film: FilmStock,
                              file_count: int) -> bool:
        """Show what will be written and ask for confirmation."""
        film_display = film.name
        if film.format == FORMAT_120:
            film_display = f"{film.name} ({film.format})"

        self.logger.info("\n✅ Configuration:")
        self.logger.info(f"   Camera: {camera.make} {camera.model}")
        self.logger.info(f"   Lens: {lens.label}")
        self.logger.info(f"   Film: {film_display} (ISO {film.iso})")
        self.logger.info(f"   Files: {file_count} JPEGs\n")

        if self.config.assume_yes:
            return True
        return self.prompter.confirm(
            "⚠️  This will strip scanner EXIF data and add film camera metadata. Continue?",
            default=False,
        )

    # Run modes

    def run_interactive(self) -> TagSummary:
        files = self.collect_files()
        self.logger.info("🎞️  Film Metadata Tool")
        self.logger.info(f"📁 Found {len(files)} JPEG files in {self.source_label}\n")

        camera = self.select_camera()
        lens = self.select_lens(camera)
        film = self.select_film(camera)
        return self._confirm_and_process('interactive', files, camera, lens, film)

    def run_flags(self) -> TagSummary:
        files = self.collect_files()

        camera = self.gear.find_camera(self.config.camera)
        lens = self.gear.find_lens(camera, self.config.lens)
        film = self.gear.find_film(self.config.film, camera.film_format)

        self.logger.info("🎞️  Film Metadata Tool")
        self.logger.info(f"📁 Found {len(files)} JPEG files\n")
        return self._confirm_and_process('flags', files, camera, lens, film)

    def run_clean(self) -> TagSummary:
        files = self.collect_files()
        validate_files(files)

        self.logger.info("🧹 Clean Mode: Strip scanner EXIF data only")
        self.logger.info(f"📁 Found {len(files)} JPEG files in {self.source_label}\n")

        if not self.config.assume_yes and not self.prompter.confirm(
                "⚠️  This will remove all metadata except the color profile. Continue?",
                default=False):
            self.logger.info("Operation cancelled.")
            return TagSummary(mode='clean', status='cancelled', file_count=len(files))

        self.logger.info("🔄 Processing...")
        self.exiftool.strip_scanner_metadata(files)
        return self._finish(TagSummary(mode='clean', status='success', file_count=len(files)),
                            f"Cleaned {len(files)} files.")

    def run(self) -> TagSummary:
        """Run in the mode selected by the configuration."""
        mode = self.config.mode
        self.logger.verbose_info(f"Mode: {mode}")
        self.logger.verbose_info(f"Gear file: {self.gear_store.path}")
        if mode == 'clean':
            return self.run_clean()
        if mode == 'flags':
            return self.run_flags()
        return self.run_interactive()

    def _confirm_and_process(self, mode: str, files: List[Path], camera: Camera,
                             lens: Lens, film: FilmStock) -> TagSummary:
        summary = TagSummary(
            mode=mode,
            status='cancelled',
            file_count=len(files),
            camera=camera.key,
            lens=lens.name,
            film=f"{film.name} ({film.format})",
        )
        if not self.confirm_configuration(camera, lens, film, len(files)):
            self.logger.info("Operation cancelled.")
            return summary

        self.process_files(files, camera, lens, film)
        summary.status = 'success'
        return self._finish(summary, f"Updated {len(files)} files.")

    def _finish(self, summary: TagSummary, message: str) -> TagSummary:
        if self.config.dry_run:
            summary.status = 'dry_run'
            self.logger.info("\n[DRY RUN] No files were actually modified.")
        else:
            self.logger.info(f"✅ Complete! {message}")
        return summary

    def process_files(self, files: List[Path], camera: Camera, lens: Lens, film: FilmStock):
        """
        Strip scanner metadata, then write the film metadata.

        Raises:
            FileNotFoundError, UnsupportedFileError: If a file cannot be tagged
            ExifToolError: If either exiftool run fails
        """
        validate_files(files)

        self.logger.info("🔄 Processing...")
        try:
            self.exiftool.strip_scanner_metadata(files)
        except ExifToolError as e:
            raise ExifToolError(f"failed to strip metadata: {e}")
        try:
            self.exiftool.apply_film_metadata(camera, lens, film, files)
        except ExifToolError as e:
            raise ExifToolError(f"failed to apply metadata: {e}")
