"""
Pytest fixtures for albumgen tests.
"""

import io

import pytest


def _jpeg_bytes(size=(100, 100), color='red', orientation=None, exif_tags=None, split_color=None):
    from PIL import Image
    
    img = Image.new('RGB', size, color=color)
    if split_color:
        # right half in a second color, for orientation checks
        width, height = size
        img.paste(Image.new('RGB', (width - width // 2, height), color=split_color), (width // 2, 0))
    
    exif = Image.Exif()
    if orientation is not None:
        exif[0x0112] = orientation
    for tag, value in (exif_tags or {}).items():
        exif[tag] = value
    
    buffer = io.BytesIO()
    if len(exif):
        img.save(buffer, format='JPEG', exif=exif, quality=95)
    else:
        img.save(buffer, format='JPEG', quality=95)
    return buffer.getvalue()


@pytest.fixture
def make_jpeg():
    """Fixture providing a factory for JPEG bytes."""
    return _jpeg_bytes


@pytest.fixture
def sample_image_bytes():
    """Fixture providing sample JPEG image bytes."""
    return _jpeg_bytes()


@pytest.fixture
def album_root(tmp_path):
    """
    Fixture providing an album tree:
    
        a.jpg               red
        notes.txt
        sub/b.JPEG          blue
        sub/copy.jpg        same bytes as a.jpg
        .git/hidden.jpg
        Photos.photoslibrary/inside.jpg
    """
    root = tmp_path / 'album'
    root.mkdir()
    red = _jpeg_bytes(color='red')
    (root / 'a.jpg').write_bytes(red)
    (root / 'notes.txt').write_text('not a photo')
    (root / 'sub').mkdir()
    (root / 'sub' / 'b.JPEG').write_bytes(_jpeg_bytes(size=(120, 80), color='blue'))
    (root / 'sub' / 'copy.jpg').write_bytes(red)
    (root / '.git').mkdir()
    (root / '.git' / 'hidden.jpg').write_bytes(red)
    (root / 'Photos.photoslibrary').mkdir()
    (root / 'Photos.photoslibrary' / 'inside.jpg').write_bytes(red)
    return root


@pytest.fixture
def config(album_root):
    """Fixture providing a configuration for the sample album."""
    from albumgen.config import AlbumConfig
    
    return AlbumConfig(root=str(album_root), workers=3, serve=False)


@pytest.fixture
def store(config):
    """Fixture providing a metadata store for the sample album."""
    from albumgen.metastore import MetaStore
    
    return MetaStore(config.meta_root)


@pytest.fixture
def descriptor(album_root):
    """Fixture providing a descriptor for a.jpg."""
    from albumgen.records import FileDescriptor
    
    return FileDescriptor(path=str(album_root / 'a.jpg'), relative_path='a.jpg')


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
