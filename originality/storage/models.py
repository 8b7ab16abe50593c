from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StoredArtifact:
    """A file persisted by the ArtifactStore.

    relative_path uses "/" separators and is the identifier callers persist.
    """

    relative_path: str
    base_dir: Path

    @property
    def absolute_path(self) -> Path:
        return self.base_dir / self.relative_path
