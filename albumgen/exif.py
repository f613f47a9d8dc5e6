"""
EXIF helpers: orientation, capture time and location.

Orientation tags map to a counter-clockwise rotation and a flip applied
after rotating:

    tag  angle  flip
    1      0    -
    2      0    horizontal
    3    180    -
    4    180    horizontal
    5    -90    horizontal
    6    -90    -
    7     90    horizontal
    8     90    -
"""

import io
import logging
from datetime import datetime
from typing import Any, Optional, Sequence, Tuple

from PIL import ExifTags, Image

from .records import Flip, Orientation, PhotoMetadata

logger = logging.getLogger(__name__)

ORIENTATIONS = {
    1: Orientation(0, Flip.NONE),
    2: Orientation(0, Flip.HORIZONTAL),
    3: Orientation(180, Flip.NONE),
    4: Orientation(180, Flip.HORIZONTAL),
    5: Orientation(-90, Flip.HORIZONTAL),
    6: Orientation(-90, Flip.NONE),
    7: Orientation(90, Flip.HORIZONTAL),
    8: Orientation(90, Flip.NONE),
}

_ROTATIONS = {
    90: Image.Transpose.ROTATE_90,
    -90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
}

_FLIPS = {
    Flip.HORIZONTAL: Image.Transpose.FLIP_LEFT_RIGHT,
    Flip.VERTICAL: Image.Transpose.FLIP_TOP_BOTTOM,
}

EXIF_DATETIME_FORMAT = '%Y:%m:%d %H:%M:%S'


def orientation_for_tag(tag: Any) -> Orientation:
    """Map an EXIF orientation value to rotation and flip."""
    try:
        return ORIENTATIONS.get(int(tag), Orientation())
    except (TypeError, ValueError):
        return Orientation()


def apply_orientation(image: Image.Image, orientation: Orientation) -> Image.Image:
    """Rotate, then flip, an image."""
    rotation = _ROTATIONS.get(orientation.angle)
    if rotation is not None:
        image = image.transpose(rotation)
    flip = _FLIPS.get(orientation.flip)
    if flip is not None:
        image = image.transpose(flip)
    return image


def parse_exif_datetime(value: Any) -> Optional[datetime]:
    """Parse an EXIF 'YYYY:MM:DD HH:MM:SS' value."""
    if isinstance(value, bytes):
        value = value.decode('ascii', errors='ignore')
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip('\x00 '), EXIF_DATETIME_FORMAT)
    except ValueError:
        return None


def gps_to_degrees(value: Sequence[Any], ref: Any) -> Optional[float]:
    """Convert a (degrees, minutes, seconds) GPS triple to signed decimal degrees."""
    try:
        degrees, minutes, seconds = (float(part) for part in value)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    decimal = degrees + minutes / 60 + seconds / 3600
    if isinstance(ref, bytes):
        ref = ref.decode('ascii', errors='ignore')
    if isinstance(ref, str) and ref.strip('\x00 ').upper() in ('S', 'W'):
        decimal = -decimal
    return decimal


def _location(exif: Image.Exif) -> Optional[Tuple[float, float]]:
    gps = exif.get_ifd(ExifTags.IFD.GPSInfo)
    if not gps:
        return None
    latitude = gps_to_degrees(gps.get(ExifTags.GPS.GPSLatitude), gps.get(ExifTags.GPS.GPSLatitudeRef))
    longitude = gps_to_degrees(gps.get(ExifTags.GPS.GPSLongitude), gps.get(ExifTags.GPS.GPSLongitudeRef))
    if latitude is None or longitude is None:
        return None
    return latitude, longitude


def _taken_at(exif: Image.Exif) -> Optional[datetime]:
    exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
    taken_at = parse_exif_datetime(exif_ifd.get(ExifTags.Base.DateTimeOriginal))
    if taken_at is None:
        taken_at = parse_exif_datetime(exif.get(ExifTags.Base.DateTime))
    return taken_at


def read_metadata(image_data: bytes) -> PhotoMetadata:
    """
    Read orientation, capture time and location from a photo's EXIF block.
    
    Works on its own view of the bytes, so callers can decode the same
    buffer independently. Missing or broken EXIF yields defaults.
    """
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            exif = img.getexif()
    except Exception as e:
        logger.debug(f"Could not decode Exif information: {e}")
        return PhotoMetadata()
    
    if not exif:
        logger.debug("No Exif information")
        return PhotoMetadata()
    
    metadata = PhotoMetadata()
    
    tag = exif.get(ExifTags.Base.Orientation)
    if tag is None:
        logger.debug("No EXIF orientation tag")
    else:
        metadata.orientation = orientation_for_tag(tag)
    
    try:
        metadata.taken_at = _taken_at(exif)
        metadata.location = _location(exif)
    except Exception as e:
        logger.debug(f"EXIF error: {e}")
    
    return metadata
