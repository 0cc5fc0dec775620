"""Run face detection and clustering over a photo batch in the background."""

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from people_albums.clustering.greedy import assign_clusters
from people_albums.clustering.postprocess import postprocess_clusters
from people_albums.clustering.store import ClusterStore
from people_albums.config import DETECTION_PROGRESS_SHARE, MIN_CLUSTER_SIZE, SIMILARITY_THRESHOLD
from people_albums.detection.detector import FaceDetector, detect_photo
from people_albums.models import BatchResult, BatchSnapshot, FaceCluster, FaceInstance, Photo

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[BatchSnapshot], None]


class BatchOrchestrator:
    """Detect faces in a batch of photos and publish the resulting clusters.

    A run executes on a single dedicated worker thread; ``run`` returns
    immediately with a future. Photos are processed one at a time in input
    order, because the greedy assignment depends on the order of faces.

    The consuming side either polls ``snapshot()`` or passes ``on_update``,
    which is called on the worker thread after every state change: once when
    the run starts, once per detected photo, and once after publication.
    Clusters are published to ``store`` only when a run completes, so readers
    see either the previous result or the new one, never a partial batch.
    """

    def __init__(
        self,
        detector: FaceDetector,
        store: ClusterStore | None = None,
        threshold: float = SIMILARITY_THRESHOLD,
        min_cluster_size: int = MIN_CLUSTER_SIZE,
        on_update: UpdateCallback | None = None,
    ) -> None:
        if not -1.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [-1, 1], got {threshold}")
        if min_cluster_size < 1:
            raise ValueError(f"min_cluster_size must be positive, got {min_cluster_size}")

        self.detector = detector
        self.store = store if store is not None else ClusterStore()
        self.threshold = threshold
        self.min_cluster_size = min_cluster_size
        self.on_update = on_update

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="face-clustering")
        self._lock = threading.Lock()
        self._is_processing = False
        self._progress = 0.0
        self._dropped = 0
        self._cancel_event: threading.Event | None = None

    def __enter__(self) -> "BatchOrchestrator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    @property
    def is_processing(self) -> bool:
        with self._lock:
            return self._is_processing

    @property
    def progress(self) -> float:
        with self._lock:
            return self._progress

    def snapshot(self) -> BatchSnapshot:
        """Return a consistent view of the processing flag, progress and clusters."""
        with self._lock:
            return self._snapshot_locked()

    def run(self, photos: Iterable[Photo]) -> Future[BatchResult] | None:
        """Start clustering ``photos`` in the background.

        Returns:
            A future resolving to the BatchResult, or None when ``photos`` is
            empty (nothing is started and the current state is kept).

        Raises:
            RuntimeError: If a run is already in progress or the
                orchestrator has been shut down.
        """
        batch = list(photos)
        if not batch:
            return None

        with self._lock:
            if self._is_processing:
                raise RuntimeError("A face clustering run is already in progress")
            self._is_processing = True
            self._progress = 0.0
            cancel_event = threading.Event()
            self._cancel_event = cancel_event

        try:
            future = self._executor.submit(
                self._run_batch, batch, self.threshold, self.min_cluster_size, cancel_event
            )
        except RuntimeError:
            with self._lock:
                self._is_processing = False
                self._cancel_event = None
            raise

        logger.info("Starting face clustering over %d photos", len(batch))
        return future

    def cancel(self) -> bool:
        """Ask the in-flight run to stop before its next photo.

        Returns:
            True if a run was in flight.
        """
        with self._lock:
            if self._cancel_event is None:
                return False
            self._cancel_event.set()
            return True

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run_batch(
        self,
        photos: list[Photo],
        threshold: float,
        min_cluster_size: int,
        cancel_event: threading.Event,
    ) -> BatchResult:
        total = len(photos)
        faces: list[FaceInstance] = []
        dropped = 0
        with self._lock:
            started = self._snapshot_locked()
        self._notify(started)

        try:
            for done, photo in enumerate(photos, start=1):
                if cancel_event.is_set():
                    logger.info("Face clustering cancelled after %d/%d photos", done - 1, total)
                    self._finish(dropped=dropped)
                    return BatchResult(
                        clusters=[],
                        photo_count=done - 1,
                        face_count=len(faces),
                        dropped_detections=dropped,
                        cancelled=True,
                    )

                outcome = detect_photo(self.detector, photo)
                # Detection is best-effort: failures are counted, never raised
                if not outcome.ok:
                    logger.debug("Skipping photo %s: %s", photo.id, outcome.error)
                elif outcome.dropped:
                    logger.debug("Dropped %d faces without embedding in %s", outcome.dropped, photo.id)
                dropped += outcome.dropped
                faces.extend(outcome.faces)

                with self._lock:
                    self._progress = done / total * DETECTION_PROGRESS_SHARE
                    update = self._snapshot_locked()
                self._notify(update)

            clusters = postprocess_clusters(
                assign_clusters(faces, threshold), photos, min_cluster_size
            )
        except BaseException:
            self._finish(dropped=dropped)
            raise

        delivered = [cluster.copy() for cluster in clusters]
        self._finish(dropped=dropped, clusters=clusters)
        logger.info(
            "Face clustering done: %d faces, %d people, %d dropped detections",
            len(faces),
            len(clusters),
            dropped,
        )
        return BatchResult(
            clusters=delivered,
            photo_count=total,
            face_count=len(faces),
            dropped_detections=dropped,
        )

    def _finish(self, dropped: int, clusters: list[FaceCluster] | None = None) -> None:
        with self._lock:
            if clusters is not None:
                self.store.publish(clusters)
                self._progress = 1.0
            self._dropped = dropped
            self._is_processing = False
            self._cancel_event = None
            final = self._snapshot_locked()
        self._notify(final)

    def _snapshot_locked(self) -> BatchSnapshot:
        # Caller holds self._lock
        return BatchSnapshot(
            is_processing=self._is_processing,
            progress=self._progress,
            clusters=[cluster.copy() for cluster in self.store.clusters],
            dropped_detections=self._dropped,
        )

    def _notify(self, snapshot: BatchSnapshot) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(snapshot)
        except Exception:
            logger.exception("Progress callback failed")
