"""Load photos from files and folders on disk."""

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from people_albums.config import IMAGE_SUFFIXES, PHOTO_FETCH_LIMIT, PHOTOS_DIR
from people_albums.models import Photo


def load_photos(
    sources: Iterable[str | Path] | None = None,
    limit: int | None = PHOTO_FETCH_LIMIT,
) -> list[Photo]:
    """Collect readable images from the given files and folders.

    Folders are scanned one level deep. Files Pillow cannot open are
    skipped. Photos are returned newest first (by modification time), at
    most ``limit`` of them, with the file path as the photo ID.

    Args:
        sources: Image files and/or folders (default: PHOTOS_DIR).
        limit: Max number of photos to return (None for all).

    Returns:
        List of Photo objects.
    """
    paths: list[Path] = []
    for source in sources or [PHOTOS_DIR]:
        path = Path(source)
        if path.is_dir():
            paths.extend(sorted(p for p in path.iterdir() if p.is_file()))
        elif path.is_file():
            paths.append(path)

    photos: list[Photo] = []
    seen: set[str] = set()
    for path in paths:
        photo_id = str(path)
        if photo_id in seen or not is_image(path):
            continue
        seen.add(photo_id)
        created_at = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
        photos.append(Photo(id=photo_id, path=path, created_at=created_at))

    # Stable sort keeps scan order among photos with equal timestamps
    photos.sort(key=lambda p: p.created_at, reverse=True)

    if limit is not None:
        photos = photos[:limit]
    return photos


def is_image(path: Path) -> bool:
    """Return True if the file has an image suffix and Pillow can open it."""
    if path.suffix.lower() not in IMAGE_SUFFIXES:
        return False
    try:
        with Image.open(path) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        return False
    return True
