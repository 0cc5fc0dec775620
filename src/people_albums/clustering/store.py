"""Published cluster collection and the operations users run on it."""

import logging
import threading
from collections.abc import Iterable, Sequence

from people_albums.config import ALBUM_NAME_TEMPLATE
from people_albums.models import FaceCluster, PersonAlbum, Photo

logger = logging.getLogger(__name__)


class ClusterStore:
    """Holds the clusters of the last completed batch run.

    Every operation takes the store lock, so renames and merges are
    serialized with the orchestrator publishing a new result. Unknown
    cluster ids are ignored rather than reported.
    """

    def __init__(self, clusters: Iterable[FaceCluster] = ()) -> None:
        self._lock = threading.RLock()
        self._clusters: list[FaceCluster] = list(clusters)

    @property
    def clusters(self) -> list[FaceCluster]:
        with self._lock:
            return list(self._clusters)

    def __len__(self) -> int:
        with self._lock:
            return len(self._clusters)

    def publish(self, clusters: Iterable[FaceCluster]) -> None:
        """Replace the whole collection with a new batch result."""
        with self._lock:
            self._clusters = list(clusters)

    def get(self, cluster_id: str) -> FaceCluster | None:
        with self._lock:
            index = self._index_of(cluster_id)
            return None if index is None else self._clusters[index]

    def rename(self, cluster_id: str, new_name: str) -> None:
        with self._lock:
            index = self._index_of(cluster_id)
            if index is None:
                logger.debug("rename ignored, unknown cluster %s", cluster_id)
                return
            self._clusters[index].name = new_name

    def merge(self, source_id: str, target_id: str) -> None:
        """Move every face of ``source_id`` to the end of ``target_id``.

        The source cluster disappears from the store. The target keeps its
        representative photo even if a merged face is more confident.
        """
        with self._lock:
            source_index = self._index_of(source_id)
            target_index = self._index_of(target_id)
            if source_index is None or target_index is None or source_index == target_index:
                logger.debug("merge ignored: %s -> %s", source_id, target_id)
                return

            source = self._clusters[source_index]
            self._clusters[target_index].members.extend(source.members)
            del self._clusters[source_index]

    def photos_for_cluster(self, cluster: FaceCluster, all_photos: Sequence[Photo]) -> list[Photo]:
        """Return the photos containing the cluster's faces, in library order."""
        with self._lock:
            photo_ids = cluster.photo_ids
        seen: set[str] = set()
        photos: list[Photo] = []
        for photo in all_photos:
            if photo.id in photo_ids and photo.id not in seen:
                seen.add(photo.id)
                photos.append(photo)
        return photos

    def album_for_cluster(self, cluster_id: str, all_photos: Sequence[Photo]) -> PersonAlbum | None:
        """Build an album of every photo the person appears in."""
        with self._lock:
            cluster = self.get(cluster_id)
            if cluster is None:
                return None
            return PersonAlbum(
                name=ALBUM_NAME_TEMPLATE.format(name=cluster.name),
                cluster_id=cluster.id,
                photos=self.photos_for_cluster(cluster, all_photos),
            )

    def _index_of(self, cluster_id: str) -> int | None:
        for index, cluster in enumerate(self._clusters):
            if cluster.id == cluster_id:
                return index
        return None
