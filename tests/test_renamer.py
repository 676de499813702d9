"""Tests for extension comparison and in-place renaming."""

import os
import pytest
from fix_images.renamer import (
    FileOperationError,
    current_extension,
    is_extension_correct,
    rename_in_place,
    target_name,
)


@pytest.mark.parametrize('name, ext', [
    ('photo.png', 'png'),
    ('PHOTO.JPG', 'jpg'),
    ('archive.tar.gz', 'gz'),
    ('noext', ''),
    ('photo.', ''),
])
def test_current_extension(name, ext):
    assert current_extension(name) == ext


def test_jpeg_is_equivalent_to_jpg():
    """Test that .jpeg never triggers a rename for JPEG content."""
    assert is_extension_correct('jpeg', 'jpg') is True
    assert is_extension_correct('jpg', 'jpg') is True


def test_equivalence_is_one_way():
    """Test that the jpeg/jpg relaxation does not apply to other pairs."""
    assert is_extension_correct('jpg', 'jpeg') is False
    assert is_extension_correct('png', 'jpg') is False
    assert is_extension_correct('', 'png') is False


def test_target_name():
    assert target_name('logo.png', 'webp') == 'logo.webp'
    assert target_name('noext', 'gif') == 'noext.gif'
    assert target_name('photo.', 'gif') == 'photo.gif'
    assert target_name('photo.final.bmp', 'jpg') == 'photo.final.jpg'


def test_rename_in_place(temp_dir):
    """Test basic rename within the same directory."""
    old_path = temp_dir / 'logo.png'
    old_path.write_bytes(b'data')
    original_mtime = old_path.stat().st_mtime

    new_path = rename_in_place(old_path, 'logo.webp')

    assert new_path == temp_dir / 'logo.webp'
    assert not old_path.exists()
    assert new_path.read_bytes() == b'data'
    assert abs(new_path.stat().st_mtime - original_mtime) < 2.0


def test_rename_same_name_is_noop(temp_dir):
    path = temp_dir / 'photo.png'
    path.write_bytes(b'data')

    assert rename_in_place(path, 'photo.png') is None
    assert path.exists()


def test_collision_is_skipped(temp_dir):
    """Test that an existing target is never overwritten."""
    source = temp_dir / 'photo.png'
    source.write_bytes(b'new')
    existing = temp_dir / 'photo.gif'
    existing.write_bytes(b'existing')

    assert rename_in_place(source, 'photo.gif') is None
    assert source.read_bytes() == b'new'
    assert existing.read_bytes() == b'existing'


def test_rename_nonexistent_file_raises(temp_dir):
    """Test that a vanished source surfaces as FileOperationError."""
    with pytest.raises(FileOperationError) as excinfo:
        rename_in_place(temp_dir / 'gone.png', 'gone.gif')

    assert 'gone.png' in str(excinfo.value)
    assert isinstance(excinfo.value, OSError)


@pytest.mark.skipif(os.name == 'nt', reason="POSIX permission test")
@pytest.mark.skipif(hasattr(os, 'geteuid') and os.geteuid() == 0, reason="root ignores permissions")
def test_rename_in_readonly_directory_raises(temp_dir):
    """Test that permission failures are reported, not swallowed."""
    path = temp_dir / 'photo.png'
    path.write_bytes(b'data')
    os.chmod(temp_dir, 0o555)
    try:
        with pytest.raises(FileOperationError):
            rename_in_place(path, 'photo.gif')
    finally:
        os.chmod(temp_dir, 0o755)
