"""Project-wide configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("PEOPLE_ALBUMS_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")

PHOTOS_DIR = Path(os.environ.get("PEOPLE_ALBUMS_PHOTOS_DIR", PROJECT_ROOT / "data" / "photos"))

# Photo library
PHOTO_FETCH_LIMIT = int(os.environ.get("PHOTO_FETCH_LIMIT", "100"))
IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".heic", ".bmp", ".tif", ".tiff", ".webp"})

# Clustering
SIMILARITY_THRESHOLD = float(os.environ.get("FACE_SIMILARITY_THRESHOLD", "0.6"))
MIN_CLUSTER_SIZE = 2
CLUSTER_NAME_TEMPLATE = "Person {index}"
ALBUM_NAME_TEMPLATE = "{name} Album"

# Share of the progress bar spent on detection; clustering takes the rest
DETECTION_PROGRESS_SHARE = 0.8

# Face detection – InsightFace
INSIGHTFACE_MODEL_NAME = "buffalo_l"
FACE_DET_SIZE = (640, 640)
DEFAULT_DEVICE = os.environ.get("FACE_DEVICE", "cpu")
