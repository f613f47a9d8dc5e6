"""Tests for ThumbnailBuilder class."""

import io
from unittest.mock import MagicMock

import pytest
from PIL import Image

from albumgen.builder import ThumbnailBuilder
from albumgen.hasher import ContentHasher
from albumgen.metastore import MetaStore
from albumgen.records import FileDescriptor, ThumbnailTask
from albumgen.thumbnail_generator import ThumbnailGenerator


class TestThumbnailBuilder:
    """Tests for ThumbnailBuilder class."""
    
    @pytest.fixture
    def task(self, store, descriptor):
        fingerprint = ContentHasher(store).fingerprint_file(descriptor.path)
        return ThumbnailTask(descriptor=descriptor, fingerprint=fingerprint)
    
    def test_generates_thumbnail(self, store, task, logger):
        builder = ThumbnailBuilder(store, logger=logger)
        
        result = builder.process(task)
        
        assert result.status == 'generated'
        assert result.thumb_size == (100, 100)
        assert result.thumb_bytes > 0
        path = store.thumb_path(task.fingerprint)
        assert Image.open(path).size == (100, 100)
    
    def test_existing_thumbnail_skips_decode(self, store, task, logger):
        store.write_thumbnail(task.fingerprint, b'existing')
        thumb_gen = MagicMock(spec=ThumbnailGenerator)
        builder = ThumbnailBuilder(store, thumb_gen, logger=logger)
        
        result = builder.process(task)
        
        assert result.status == 'cached'
        thumb_gen.generate.assert_not_called()
        assert store.thumb_path(task.fingerprint).read_bytes() == b'existing'
    
    def test_dry_run_builds_but_does_not_write(self, store, task, logger):
        builder = ThumbnailBuilder(store, dry_run=True, logger=logger)
        
        result = builder.process(task)
        
        assert result.status == 'generated'
        assert result.thumb_bytes > 0
        assert not store.has_thumbnail(task.fingerprint)
    
    def test_missing_file_fails(self, store, album_root, logger):
        builder = ThumbnailBuilder(store, logger=logger)
        task = ThumbnailTask(
            FileDescriptor(path=str(album_root / 'gone.jpg'), relative_path='gone.jpg'),
            fingerprint='0' * 40,
        )
        
        result = builder.process(task)
        
        assert result.status == 'failed'
        assert not result.ok
        assert not store.has_thumbnail('0' * 40)
    
    def test_corrupt_file_fails(self, store, album_root, logger):
        (album_root / 'broken.jpg').write_bytes(b'\xff\xd8 definitely not a jpeg')
        builder = ThumbnailBuilder(store, logger=logger)
        descriptor = FileDescriptor(path=str(album_root / 'broken.jpg'), relative_path='broken.jpg')
        task = ThumbnailTask(descriptor, ContentHasher(store).fingerprint_file(descriptor.path))
        
        result = builder.process(task)
        
        assert result.status == 'failed'
        assert result.error
        assert result.error != 'file changed since hashing'
    
    def test_file_changed_after_hashing_is_not_stored(self, store, task, descriptor, logger, make_jpeg):
        with open(descriptor.path, 'wb') as f:
            f.write(make_jpeg(color='green'))
        builder = ThumbnailBuilder(store, logger=logger)
        
        result = builder.process(task)
        
        assert result.status == 'failed'
        assert result.error == 'file changed since hashing'
        assert not store.has_thumbnail(task.fingerprint)
    
    def test_changed_file_builds_under_new_fingerprint(self, store, task, descriptor, logger, make_jpeg):
        with open(descriptor.path, 'wb') as f:
            f.write(make_jpeg(color='green'))
        fingerprint = ContentHasher(store).fingerprint_file(descriptor.path)
        
        result = ThumbnailBuilder(store, logger=logger).process(ThumbnailTask(descriptor, fingerprint))
        
        assert fingerprint != task.fingerprint
        assert result.status == 'generated'
        red, green, _ = Image.open(store.thumb_path(fingerprint)).convert('RGB').getpixel((50, 50))
        assert green > red
    
    def test_write_failure_is_reported(self, config, task, logger):
        config.meta_root.mkdir()
        (config.meta_root / 'thumbs').write_text('not a directory')
        builder = ThumbnailBuilder(MetaStore(config.meta_root), logger=logger)
        
        result = builder.process(task)
        
        assert result.status == 'failed'
    
    def test_metadata_is_returned(self, store, album_root, logger, make_jpeg):
        (album_root / 'rotated.jpg').write_bytes(make_jpeg(size=(60, 30), orientation=8))
        descriptor = FileDescriptor(path=str(album_root / 'rotated.jpg'), relative_path='rotated.jpg')
        task = ThumbnailTask(descriptor, ContentHasher(store).fingerprint_file(descriptor.path))
        
        result = ThumbnailBuilder(store, logger=logger).process(task)
        
        assert result.metadata.orientation.angle == 90
        assert result.thumb_size == (30, 60)
        assert 'GENERATED 30x60' in result.format_status()
