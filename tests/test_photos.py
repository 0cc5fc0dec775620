"""Tests for loading photos from disk."""

import os

from PIL import Image

from people_albums.photos import is_image, load_photos


def _write_image(path, mtime: int) -> None:
    Image.new("RGB", (8, 8), color=(200, 100, 50)).save(path)
    os.utime(path, (mtime, mtime))


def test_load_photos_newest_first(tmp_path):
    _write_image(tmp_path / "old.jpg", 1_000_000)
    _write_image(tmp_path / "new.png", 3_000_000)
    _write_image(tmp_path / "mid.jpg", 2_000_000)

    photos = load_photos([tmp_path])

    assert [p.path.name for p in photos] == ["new.png", "mid.jpg", "old.jpg"]
    assert photos[0].id == str(tmp_path / "new.png")
    assert photos[0].created_at.timestamp() == 3_000_000


def test_load_photos_skips_non_images(tmp_path):
    _write_image(tmp_path / "face.jpg", 1_000_000)
    (tmp_path / "notes.txt").write_text("hello")
    (tmp_path / "broken.jpg").write_bytes(b"not really a jpeg")
    (tmp_path / "sub").mkdir()
    _write_image(tmp_path / "sub" / "nested.jpg", 1_000_000)

    photos = load_photos([tmp_path])

    assert [p.path.name for p in photos] == ["face.jpg"]


def test_load_photos_mixes_files_and_folders(tmp_path):
    folder = tmp_path / "album"
    folder.mkdir()
    _write_image(folder / "a.jpg", 1_000_000)
    single = tmp_path / "b.jpg"
    _write_image(single, 2_000_000)

    photos = load_photos([folder, single, single])

    assert [p.path.name for p in photos] == ["b.jpg", "a.jpg"]


def test_load_photos_limit(tmp_path):
    for i in range(5):
        _write_image(tmp_path / f"{i}.jpg", 1_000_000 + i)

    photos = load_photos([tmp_path], limit=2)

    assert [p.path.name for p in photos] == ["4.jpg", "3.jpg"]


def test_load_photos_missing_source(tmp_path):
    assert load_photos([tmp_path / "nope"]) == []


def test_is_image(tmp_path):
    _write_image(tmp_path / "ok.jpg", 1_000_000)
    (tmp_path / "fake.png").write_text("x")
    assert is_image(tmp_path / "ok.jpg")
    assert not is_image(tmp_path / "fake.png")
