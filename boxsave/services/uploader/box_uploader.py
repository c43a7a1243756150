import logging
import os
from typing import BinaryIO, Optional, Tuple

import requests
from requests_toolbelt import MultipartEncoder

from boxsave.config import Settings, settings
from boxsave.models.artifact import ArtifactIdentity
from boxsave.services.uploader.cleaner import VersionCleaner
from boxsave.services.uploader.errors import ServerUnreachable, UploadFailed
from boxsave.services.uploader.interfaces import ProgressReporter
from boxsave.services.uploader.progress import ConsoleProgressReporter, ProgressReader, ProgressTracker
from boxsave.services.uploader.upload_service import BoxSaveService
from boxsave.services.uploader.urls import build_box_url, join_url, normalize_provider

logger = logging.getLogger(__name__)

BOX_FIELD = "box"


class BoxUploader:
    """Streams a box file to the box server"""

    def __init__(self, config: Settings, reporter: ProgressReporter):
        self.config = config
        self.reporter = reporter

    def send(self, artifact: ArtifactIdentity, file_path: str, version: str) -> str:
        """
        Upload ``file_path`` as ``version`` of ``artifact``.

        Args:
            artifact: Box name and local provider
            file_path: Path to the exported box file
            version: Version label to publish under

        Returns:
            The provider name the server files the box under
        """
        self.reporter.info("Uploading now")
        logger.debug(f"Preparing to send file {file_path}")

        provider = normalize_provider(artifact.provider)
        ping_url = build_box_url(artifact, self.config)
        post_url = join_url(ping_url, version, provider)

        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Box file not found: {file_path}")

        # opened before any request goes out
        with open(file_path, "rb") as f:
            full_size = os.fstat(f.fileno()).st_size

            with requests.Session() as session:
                self._ping(session, ping_url)

                logger.debug(f"Sending file to {post_url} ({full_size} bytes)")
                self.reporter.info("Uploading")
                try:
                    response = self._post(session, post_url, f, os.path.basename(file_path), full_size)
                finally:
                    self.reporter.clear_line()

        if response.status_code != 200:
            raise UploadFailed(post_url, response.status_code)

        self.reporter.info("Upload successful")
        logger.info(f"Uploaded {artifact.name} {version} ({provider})")
        return provider

    def _ping(self, session: requests.Session, ping_url: str) -> None:
        logger.debug(f"Pinging {ping_url}")
        try:
            response = session.options(ping_url, timeout=self._probe_timeout())
        except requests.RequestException as e:
            raise ServerUnreachable(ping_url) from e

        if response.status_code != 200:
            raise ServerUnreachable(ping_url, response.status_code)

    def _post(self, session: requests.Session, post_url: str, f: BinaryIO, filename: str,
              full_size: int) -> requests.Response:
        tracker = ProgressTracker(self.reporter, full_size)
        if full_size == 0:
            # nothing will be read, report completion up front
            tracker.advance(0)

        encoder = MultipartEncoder(fields={
            BOX_FIELD: (filename,
                        ProgressReader(f, full_size, tracker),
                        "application/octet-stream"),
        })
        return session.post(
            post_url,
            data=encoder,
            headers={"Content-Type": encoder.content_type},
            timeout=self._upload_timeout(),
        )

    def _probe_timeout(self) -> Tuple[float, float]:
        return self.config.connect_timeout, self.config.receive_timeout

    def _upload_timeout(self) -> Tuple[float, float]:
        # requests uses one socket timeout for both writing the body and reading the reply
        return self.config.connect_timeout, max(self.config.send_timeout, self.config.receive_timeout)


class UploadServiceBuilder:
    """Constructs service with dependencies"""
    @staticmethod
    def build(config: Optional[Settings] = None,
              reporter: Optional[ProgressReporter] = None) -> BoxSaveService:
        config = config or settings
        reporter = reporter or ConsoleProgressReporter()
        uploader = BoxUploader(config, reporter)
        cleaner = VersionCleaner(config, reporter)
        return BoxSaveService(uploader, cleaner)
