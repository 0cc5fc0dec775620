"""InsightFace wrapper for face detection and embedding extraction."""

from pathlib import Path

import cv2
import numpy as np
from insightface.app import FaceAnalysis

from people_albums.config import DEFAULT_DEVICE, FACE_DET_SIZE, INSIGHTFACE_MODEL_NAME
from people_albums.detection.detector import Detection, DetectionError, normalize_bbox
from people_albums.models import Photo


class InsightFaceDetector:
    """Detect faces and extract ArcFace embeddings using InsightFace."""

    def __init__(
        self,
        model_name: str = INSIGHTFACE_MODEL_NAME,
        device: str = DEFAULT_DEVICE,
        det_size: tuple[int, int] = FACE_DET_SIZE,
    ) -> None:
        providers = (
            ["CUDAExecutionProvider", "CPUExecutionProvider"]
            if device == "cuda"
            else ["CPUExecutionProvider"]
        )
        self.app = FaceAnalysis(name=model_name, providers=providers)
        self.app.prepare(ctx_id=0 if device == "cuda" else -1, det_size=det_size)
        self.model_name = model_name

    def detect(self, photo: Photo) -> list[Detection]:
        """Detect faces in a photo.

        Args:
            photo: Photo with a readable ``path``.

        Returns:
            One Detection per face, in the order InsightFace reports them.

        Raises:
            DetectionError: If the photo has no path or cannot be decoded.
        """
        if photo.path is None:
            raise DetectionError(f"Photo {photo.id} has no file path")

        img = cv2.imread(str(Path(photo.path)))
        if img is None:
            raise DetectionError(f"Could not decode {photo.path}")

        height, width = img.shape[:2]
        detections = []

        for face in self.app.get(img):
            embedding = face.normed_embedding if face.embedding is not None else None
            detections.append(
                Detection(
                    bounding_box=normalize_bbox(tuple(face.bbox.astype(float)), width, height),
                    confidence=float(face.det_score),
                    embedding=embedding.astype(np.float32) if embedding is not None else None,
                )
            )

        return detections
