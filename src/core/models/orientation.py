"""Screen orientation enumeration."""
from enum import Enum


class Orientation(Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"
