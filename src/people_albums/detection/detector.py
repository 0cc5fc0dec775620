"""Boundary between the clustering core and a face detection backend."""

from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from people_albums.models import BoundingBox, FaceInstance, Photo, new_face_id


class DetectionError(RuntimeError):
    """A photo could not be run through the detector."""


@dataclass(frozen=True)
class Detection:
    """A face reported by a detector. ``embedding`` is None when extraction failed."""

    bounding_box: BoundingBox
    confidence: float
    embedding: np.ndarray | None = field(default=None, repr=False)


class FaceDetector(Protocol):
    """Anything that turns one photo into zero or more face detections."""

    def detect(self, photo: Photo) -> list[Detection]: ...


@dataclass
class PhotoDetections:
    """Faces usable for clustering from one photo, plus what had to be dropped.

    ``error`` is set when the detector failed on the whole photo; ``dropped``
    counts that failure as one, or else the faces that came back without an
    embedding.
    """

    photo_id: str
    faces: list[FaceInstance] = field(default_factory=list)
    dropped: int = 0
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def detect_photo(detector: FaceDetector, photo: Photo) -> PhotoDetections:
    """Run the detector on one photo and convert its output to face instances.

    Detector exceptions are captured in the returned outcome instead of being
    raised; faces keep the detector's order.
    """
    try:
        detections = detector.detect(photo)
    except Exception as exc:
        return PhotoDetections(photo_id=photo.id, dropped=1, error=exc)

    outcome = PhotoDetections(photo_id=photo.id)
    for detection in detections:
        if detection.embedding is None or len(detection.embedding) == 0:
            outcome.dropped += 1
            continue
        outcome.faces.append(
            FaceInstance(
                id=new_face_id(),
                photo_id=photo.id,
                bounding_box=detection.bounding_box,
                embedding=np.asarray(detection.embedding, dtype=np.float32),
                confidence=float(detection.confidence),
            )
        )
    return outcome


def normalize_bbox(
    bbox: tuple[float, float, float, float],
    image_width: int,
    image_height: int,
) -> BoundingBox:
    """Convert a pixel (x1, y1, x2, y2) box into a normalized BoundingBox.

    Boxes reaching past the image border are clipped to it.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Invalid image size: {image_width}x{image_height}")

    x1, y1, x2, y2 = (float(v) for v in bbox)
    left = _clip01(x1 / image_width)
    top = _clip01(y1 / image_height)
    right = _clip01(x2 / image_width)
    bottom = _clip01(y2 / image_height)
    return BoundingBox(
        x=left,
        y=top,
        width=max(0.0, right - left),
        height=max(0.0, bottom - top),
    )


def _clip01(value: float) -> float:
    return max(0.0, min(1.0, value))
