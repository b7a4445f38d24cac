"""
filmtag - tag scanned film photos with camera, lens and film metadata.
"""

__version__ = "1.0.0"
__author__ = "filmtag contributors"

from .config import FilmtagConfig
from .gear import GearConfig, GearStore, Camera, CameraType, Lens, FilmStock
from .tagger import FilmTagger

__all__ = [
    "FilmTagger",
    "FilmtagConfig",
    "GearConfig",
    "GearStore",
    "Camera",
    "CameraType",
    "Lens",
    "FilmStock",
    "__version__",
]
