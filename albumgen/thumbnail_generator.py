"""
ThumbnailGenerator - Decodes a JPEG, corrects orientation and resizes it.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image

from .exif import apply_orientation, read_metadata
from .records import PhotoMetadata


def fit_within(size: Tuple[int, int], max_dimension: int) -> Tuple[int, int]:
    """
    Fit (width, height) inside a square bounding box, keeping aspect ratio.
    
    Sizes that already fit are returned unchanged; images are never upscaled.
    The larger side becomes max_dimension and the smaller side is rounded up.
    """
    width, height = size
    if width <= max_dimension and height <= max_dimension:
        return width, height
    
    if width >= height:
        return max_dimension, max(1, -(-height * max_dimension // width))
    return max(1, -(-width * max_dimension // height)), max_dimension


@dataclass
class Thumbnail:
    """
    An encoded thumbnail.
    
    Attributes:
        data: JPEG bytes
        source_size: (width, height) of the decoded source
        size: (width, height) of the thumbnail after orientation
        metadata: EXIF facts read from the source
    """
    data: bytes
    source_size: Tuple[int, int]
    size: Tuple[int, int]
    metadata: PhotoMetadata


class ThumbnailGenerator:
    """
    Generates orientation-corrected JPEG thumbnails using Pillow.
    """
    
    def __init__(
        self,
        size: int = 800,
        quality: int = 85,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize thumbnail generator.
        
        Args:
            size: Maximum dimension for thumbnails (default: 800)
            quality: JPEG quality for output (default: 85)
            logger: Optional logger instance
        """
        self.size = size
        self.quality = quality
        self.logger = logger or logging.getLogger(__name__)
    
    def generate(self, image_data: bytes) -> Thumbnail:
        """
        Generate a thumbnail from JPEG data.
        
        The image and its EXIF block are read from separate views of
        image_data.
        
        Args:
            image_data: Original image as bytes
            
        Returns:
            Thumbnail with encoded bytes and dimensions
            
        Raises:
            PIL.UnidentifiedImageError, OSError: If the data is not a decodable JPEG
        """
        with Image.open(io.BytesIO(image_data), formats=['JPEG']) as source:
            source.load()
            source_size = source.size
            
            target_size = fit_within(source_size, self.size)
            if target_size == source_size:
                img = source.copy()
            else:
                img = source.resize(target_size, Image.Resampling.LANCZOS)
        
        metadata = read_metadata(image_data)
        img = apply_orientation(img, metadata.orientation)
        img = self._convert_color_mode(img)
        
        output = io.BytesIO()
        img.save(output, format='JPEG', quality=self.quality)
        
        self.logger.debug(
            f"Processed image, {source_size[0]}x{source_size[1]}, "
            f"thumbnail is {target_size[0]}x{target_size[1]}"
        )
        return Thumbnail(
            data=output.getvalue(),
            source_size=source_size,
            size=img.size,
            metadata=metadata,
        )
    
    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert image to a mode JPEG can store."""
        if img.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode == 'LA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode not in ('RGB', 'L'):
            return img.convert('RGB')
        return img
