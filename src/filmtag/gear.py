"""
Camera, lens and film stock database.

The database lives in a YAML file in the user's config directory. It is
created from built-in defaults on first run and extended whenever gear is
entered manually.
"""

from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Dict, Any, Callable

import yaml

from .config import FILM_FORMATS, FORMAT_35MM, FORMAT_120
from .errors import GearLookupError, GearConfigError


class CameraType(Enum):
    """Kind of camera body."""
    FIXED = 'fixed'
    INTERCHANGEABLE = 'interchangeable'
    MEDIUM_FORMAT = 'medium_format'

    @classmethod
    def parse(cls, value: Any) -> 'CameraType':
        """
        Parse a camera type from the gear file.

        Accepts the type name or the integer codes 0/1/2 used by older
        gear files.
        """
        if isinstance(value, CameraType):
            return value
        if isinstance(value, bool):
            raise ValueError(f"invalid camera type: {value!r}")
        if isinstance(value, int):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"invalid camera type: {value!r}")
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"invalid camera type: {value!r}")


@dataclass
class Lens:
    """A lens, either built into a camera or mountable on it."""
    name: str
    focal_length: int  # mm
    max_aperture: float  # f-number

    @property
    def label(self) -> str:
        return f"{self.name} ({self.focal_length}mm f/{self.max_aperture:.1f})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'focallength': self.focal_length,
            'maxaperture': self.max_aperture,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Lens':
        return cls(
            name=str(data.get('name', '')),
            focal_length=int(data.get('focallength', 0)),
            max_aperture=float(data.get('maxaperture', 0.0)),
        )


@dataclass
class Camera:
    """A camera body and the lenses that go with it."""
    make: str
    model: str
    type: CameraType = CameraType.FIXED
    fixed_lens: Optional[Lens] = None
    compatible_lenses: List[Lens] = field(default_factory=list)

    @property
    def key(self) -> str:
        """Key of this camera in the gear database."""
        return f"{self.make} {self.model}"

    @property
    def film_format(self) -> str:
        """Film format loaded into this camera."""
        return FORMAT_120 if self.type == CameraType.MEDIUM_FORMAT else FORMAT_35MM

    @property
    def label(self) -> str:
        if self.type == CameraType.FIXED and self.fixed_lens is not None:
            return f"{self.make} {self.model} ({self.fixed_lens.name})"
        if self.type == CameraType.MEDIUM_FORMAT:
            return f"{self.make} {self.model} (interchangeable - 120 film)"
        return f"{self.make} {self.model} (interchangeable)"

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'make': self.make,
            'model': self.model,
            'type': self.type.value,
        }
        if self.fixed_lens is not None:
            data['fixedlens'] = self.fixed_lens.to_dict()
        if self.compatible_lenses:
            data['compatiblelenses'] = [lens.to_dict() for lens in self.compatible_lenses]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Camera':
        fixed = data.get('fixedlens')
        return cls(
            make=str(data.get('make', '')),
            model=str(data.get('model', '')),
            type=CameraType.parse(data.get('type', CameraType.FIXED.value)),
            fixed_lens=Lens.from_dict(fixed) if fixed else None,
            compatible_lenses=[Lens.from_dict(l) for l in data.get('compatiblelenses') or []],
        )


@dataclass
class FilmStock:
    """A film stock in a given format."""
    name: str
    iso: int
    format: str = FORMAT_35MM

    @property
    def label(self) -> str:
        return f"{self.name} (ISO {self.iso}, {self.format})"

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'iso': self.iso, 'format': self.format}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FilmStock':
        return cls(
            name=str(data.get('name', '')),
            iso=int(data.get('iso', 0)),
            format=str(data.get('format', FORMAT_35MM)),
        )


def _match_name(candidates: List[Any], name: str, get_name: Callable[[Any], str]) -> Optional[Any]:
    """Exact name match first, then case-insensitive."""
    for item in candidates:
        if get_name(item) == name:
            return item
    wanted = name.strip().lower()
    for item in candidates:
        if get_name(item).lower() == wanted:
            return item
    return None


@dataclass
class GearConfig:
    """The full gear database."""
    cameras: Dict[str, Camera] = field(default_factory=dict)
    film_stocks: List[FilmStock] = field(default_factory=list)

    def find_camera(self, name: str) -> Camera:
        """Look up a camera by its database key, e.g. 'Contax T3'."""
        if name in self.cameras:
            return self.cameras[name]
        key = _match_name(list(self.cameras), name, lambda k: k)
        if key is None:
            raise GearLookupError(f"camera not found: {name}")
        return self.cameras[key]

    def find_lens(self, camera: Camera, name: Optional[str]) -> Lens:
        """
        Look up a lens for a camera.

        A fixed-lens camera always returns its own lens and ignores the name.
        """
        if camera.type == CameraType.FIXED and camera.fixed_lens is not None:
            return camera.fixed_lens
        lens = _match_name(camera.compatible_lenses, name or '', lambda l: l.name)
        if lens is None:
            raise GearLookupError(f"lens not found: {name or ''}")
        return lens

    def find_film(self, name: Optional[str], film_format: str) -> FilmStock:
        """Look up a film stock by name within a format."""
        film = _match_name(self.films_for_format(film_format), name or '', lambda f: f.name)
        if film is None:
            raise GearLookupError(f"film not found: {name or ''} ({film_format})")
        return film

    def films_for_format(self, film_format: str) -> List[FilmStock]:
        return [f for f in self.film_stocks if f.format == film_format]

    def add_camera(self, camera: Camera) -> str:
        """Add or replace a camera and return its key."""
        self.cameras[camera.key] = camera
        return camera.key

    def add_lens(self, camera_key: str, lens: Lens) -> bool:
        """Append a lens to a camera. Returns False if the camera is unknown."""
        camera = self.cameras.get(camera_key)
        if camera is None:
            return False
        camera.compatible_lenses.append(lens)
        return True

    def add_film(self, film: FilmStock):
        self.film_stocks.append(film)

    def validate(self) -> List[str]:
        """Validate the database and return list of problems."""
        errors = []

        for key, camera in self.cameras.items():
            if camera.type == CameraType.FIXED and camera.fixed_lens is None:
                errors.append(f"Camera '{key}' is fixed-lens but has no lens")
            if camera.type != CameraType.FIXED and camera.fixed_lens is not None:
                errors.append(f"Camera '{key}' has a fixed lens but is {camera.type.value}")
            lenses = list(camera.compatible_lenses)
            if camera.fixed_lens is not None:
                lenses.append(camera.fixed_lens)
            for lens in lenses:
                if lens.focal_length <= 0:
                    errors.append(f"Lens '{lens.name}' has invalid focal length: {lens.focal_length}")
                if lens.max_aperture <= 0:
                    errors.append(f"Lens '{lens.name}' has invalid aperture: {lens.max_aperture}")

        for film in self.film_stocks:
            if film.format not in FILM_FORMATS:
                errors.append(f"Film '{film.name}' has unknown format: {film.format}")
            if film.iso <= 0:
                errors.append(f"Film '{film.name}' has invalid ISO: {film.iso}")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cameras': {key: camera.to_dict() for key, camera in self.cameras.items()},
            'filmstocks': [film.to_dict() for film in self.film_stocks],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GearConfig':
        data = data or {}
        if not isinstance(data, dict):
            raise GearConfigError("gear file must contain a mapping")
        try:
            cameras = {
                str(key): Camera.from_dict(value or {})
                for key, value in (data.get('cameras') or {}).items()
            }
            films = [FilmStock.from_dict(f) for f in data.get('filmstocks') or []]
        except (AttributeError, TypeError, ValueError) as e:
            raise GearConfigError(f"invalid gear file: {e}")
        return cls(cameras=cameras, film_stocks=films)


_FILM_NAMES = [
    ('Cinestill 50D', 50),
    ('Cinestill 800T', 800),
    ('Kodak Portra 400', 400),
    ('Kodak Portra 800', 800),
    ('Kodak Gold 200', 200),
    ('Kodak Ultramax 400', 400),
    ('Kodak Vision3 250D', 250),
    ('Kodak Vision3 500T', 500),
]


def default_gear() -> GearConfig:
    """Built-in gear database written on first run."""
    cameras = [
        Camera(
            make='Contax', model='T3', type=CameraType.FIXED,
            fixed_lens=Lens('Carl Zeiss Sonnar T 35mm f/2.8', 35, 2.8),
        ),
        Camera(
            make='Minolta', model='CLE', type=CameraType.INTERCHANGEABLE,
            compatible_lenses=[
                Lens('Leica APO-Summicron-M 35mm f/2 ASPH.', 35, 2.0),
                Lens('Minolta 28mm 2.8 M-Rokkor', 28, 2.8),
                Lens('Canon 50mm f/1.4 LTM', 50, 1.4),
            ],
        ),
        Camera(
            make='Canon', model='7E', type=CameraType.INTERCHANGEABLE,
            compatible_lenses=[
                Lens('Canon 50mm f/1.8 LTM', 50, 1.8),
                Lens('Canon 35mm f/2.8 LTM', 35, 2.8),
            ],
        ),
        Camera(
            make='Mamiya', model='645E', type=CameraType.MEDIUM_FORMAT,
            compatible_lenses=[
                Lens('Mamiya Sekor C 80mm f/2.8', 80, 2.8),
                Lens('Mamiya Sekor C 55mm f/2.8', 55, 2.8),
                Lens('Mamiya Sekor C 150mm f/4', 150, 4.0),
            ],
        ),
    ]
    films = [
        FilmStock(name, iso, film_format)
        for film_format in FILM_FORMATS
        for name, iso in _FILM_NAMES
    ]
    return GearConfig(cameras={c.key: c for c in cameras}, film_stocks=films)


class GearStore:
    """Reads and writes the gear database file."""

    def __init__(self, path: Path, logger=None):
        self.path = Path(path)
        self.logger = logger

    def _info(self, message: str):
        if self.logger is not None:
            self.logger.info(message)
        else:
            print(message)

    def load(self) -> GearConfig:
        """
        Load the gear database, writing the defaults if the file is missing.

        Raises:
            GearConfigError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            self._info(f"No config found, creating default at: {self.path}")
            gear = default_gear()
            self.save(gear)
            return gear

        try:
            with open(self.path, 'rb') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise GearConfigError(f"could not read {self.path}: {e}")
        except yaml.YAMLError as e:
            raise GearConfigError(f"could not parse {self.path}: {e}")

        return GearConfig.from_dict(data)

    def save(self, gear: GearConfig):
        """Write the gear database to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(
                gear.to_dict(), f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
