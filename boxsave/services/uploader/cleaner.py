import logging
import re
from typing import List, Sequence, Tuple

import requests
from pydantic import ValidationError

from boxsave.config import Settings
from boxsave.models.artifact import ArtifactIdentity, BoxListing
from boxsave.services.uploader.errors import ListingFailed
from boxsave.services.uploader.interfaces import ProgressReporter
from boxsave.services.uploader.urls import build_box_url, join_url

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"(\d+)")


def version_sort_key(label: str):
    """Natural ordering: digit runs compare as numbers, so 1.0.10 > 1.0.9"""
    return [(0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in _DIGITS.split(label) if part]


def prune_versions(labels: Sequence[str], keep: int) -> Tuple[List[str], List[str]]:
    """Split labels into the ``keep`` most recent and the rest, newest first"""
    if keep < 0:
        raise ValueError(f"keep must be >= 0, got {keep}")
    if len(labels) <= keep:
        return list(labels), []

    ordered = sorted(labels, key=version_sort_key, reverse=True)
    return ordered[:keep], ordered[keep:]


class VersionCleaner:
    """Deletes old versions of a box from the box server"""

    def __init__(self, config: Settings, reporter: ProgressReporter):
        self.config = config
        self.reporter = reporter

    def clean(self, artifact: ArtifactIdentity, keep: int) -> None:
        if keep < 0:
            raise ValueError(f"keep must be >= 0, got {keep}")

        data_url = build_box_url(artifact, self.config)

        with requests.Session() as session:
            saved_versions = self._load_versions(session, data_url)
            logger.debug(f"Received {len(saved_versions)} versions")

            if len(saved_versions) <= keep:
                return

            self.reporter.info("Cleaning up old versions")
            _, removed = prune_versions(saved_versions, keep)
            for version in removed:
                self._delete(session, join_url(data_url, version))

    def _load_versions(self, session: requests.Session, data_url: str) -> List[str]:
        logger.debug(f"Load versions from {data_url}")
        try:
            response = session.get(data_url, timeout=self._timeout())
            response.raise_for_status()
            listing = BoxListing.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            # includes requests' JSONDecodeError
            raise ListingFailed(data_url, f"malformed listing: {e}") from e
        except requests.RequestException as e:
            raise ListingFailed(data_url, str(e)) from e

        return listing.labels()

    def _delete(self, session: requests.Session, delete_url: str) -> None:
        logger.debug(f"Sending delete {delete_url}")
        try:
            response = session.delete(delete_url, timeout=self._timeout())
        except requests.RequestException as e:
            logger.warning(f"Failed to delete {delete_url}: {e}")
            return

        if not response.ok:
            logger.warning(f"Failed to delete {delete_url}: status {response.status_code}")

    def _timeout(self) -> Tuple[float, float]:
        return self.config.connect_timeout, self.config.receive_timeout
