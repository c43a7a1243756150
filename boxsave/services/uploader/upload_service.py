import logging
from typing import Optional

from boxsave.models.artifact import ArtifactIdentity

logger = logging.getLogger(__name__)


class BoxSaveService:
    """Publishes a box and optionally prunes its old versions"""

    def __init__(self, uploader, cleaner):
        self.uploader = uploader
        self.cleaner = cleaner

    def save(self, artifact: ArtifactIdentity, file_path: str, version: str,
             keep: Optional[int] = None) -> str:
        """Main workflow execution"""
        provider = self.uploader.send(artifact, file_path, version)

        if keep is not None:
            self.cleaner.clean(artifact, keep)
        else:
            logger.debug("No retention count given, skipping cleanup")

        return provider
