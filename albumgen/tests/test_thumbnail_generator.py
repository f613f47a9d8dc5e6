"""Tests for ThumbnailGenerator class."""

import io

import pytest
from PIL import Image

from albumgen.thumbnail_generator import ThumbnailGenerator, fit_within


class TestFitWithin:
    """Tests for the resize policy."""
    
    def test_landscape(self):
        assert fit_within((3000, 2000), 800) == (800, 534)
    
    def test_portrait(self):
        assert fit_within((2000, 3000), 800) == (534, 800)
    
    def test_small_image_unchanged(self):
        assert fit_within((400, 300), 800) == (400, 300)
    
    def test_exact_box_unchanged(self):
        assert fit_within((800, 800), 800) == (800, 800)
        assert fit_within((800, 10), 800) == (800, 10)
    
    def test_never_zero(self):
        assert fit_within((10000, 1), 800) == (800, 1)
    
    def test_square(self):
        assert fit_within((1600, 1600), 800) == (800, 800)
    
    def test_aspect_ratio_within_one_pixel(self):
        width, height = fit_within((4032, 3024), 800)
        
        assert width == 800
        assert abs(height - 800 * 3024 / 4032) <= 1


class TestThumbnailGenerator:
    """Tests for ThumbnailGenerator class."""
    
    def test_init_defaults(self):
        gen = ThumbnailGenerator()
        
        assert gen.size == 800
        assert gen.quality == 85
    
    def test_init_custom_values(self):
        gen = ThumbnailGenerator(size=300, quality=90)
        
        assert gen.size == 300
        assert gen.quality == 90
    
    def test_generate_large_image(self, make_jpeg):
        gen = ThumbnailGenerator()
        
        thumb = gen.generate(make_jpeg(size=(3000, 2000)))
        
        assert thumb.source_size == (3000, 2000)
        assert thumb.size == (800, 534)
        img = Image.open(io.BytesIO(thumb.data))
        assert img.format == 'JPEG'
        assert img.size == (800, 534)
    
    def test_small_image_not_resized(self, make_jpeg):
        gen = ThumbnailGenerator()
        
        thumb = gen.generate(make_jpeg(size=(400, 300)))
        
        assert thumb.size == (400, 300)
        assert Image.open(io.BytesIO(thumb.data)).size == (400, 300)
    
    def test_orientation_applied_after_resize(self, make_jpeg):
        gen = ThumbnailGenerator(size=50)
        
        thumb = gen.generate(make_jpeg(size=(200, 100), orientation=6))
        
        assert thumb.source_size == (200, 100)
        assert thumb.size == (25, 50)
        assert thumb.metadata.orientation.angle == -90
    
    def test_rotation_moves_pixels(self, make_jpeg):
        gen = ThumbnailGenerator()
        data = make_jpeg(size=(40, 20), color='red', split_color='blue', orientation=6)
        
        thumb = gen.generate(data)
        
        img = Image.open(io.BytesIO(thumb.data)).convert('RGB')
        assert img.size == (20, 40)
        top = img.getpixel((10, 5))
        bottom = img.getpixel((10, 34))
        assert top[0] > top[2]
        assert bottom[2] > bottom[0]
    
    def test_horizontal_flip_moves_pixels(self, make_jpeg):
        gen = ThumbnailGenerator()
        data = make_jpeg(size=(40, 20), color='red', split_color='blue', orientation=2)
        
        img = Image.open(io.BytesIO(gen.generate(data).data)).convert('RGB')
        
        left = img.getpixel((5, 10))
        assert left[2] > left[0]
    
    def test_grayscale_source(self):
        img = Image.new('L', (100, 50), color=128)
        buffer = io.BytesIO()
        img.save(buffer, format='JPEG')
        
        thumb = ThumbnailGenerator().generate(buffer.getvalue())
        
        assert thumb.size == (100, 50)
    
    def test_generate_invalid_image(self):
        gen = ThumbnailGenerator()
        
        with pytest.raises(Exception):
            gen.generate(b'not an image')
    
    def test_png_is_rejected(self):
        img = Image.new('RGB', (10, 10))
        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        
        with pytest.raises(Exception):
            ThumbnailGenerator().generate(buffer.getvalue())
