"""
Pytest configuration for boxsave tests
"""

import pytest

from boxsave.config import Settings
from boxsave.models.artifact import ArtifactIdentity
from boxsave.services.uploader import ProgressReporter

SERVER_URL = "http://boxes.example.com"


class RecordingReporter(ProgressReporter):
    """Captures every UI call in order"""

    def __init__(self):
        self.calls = []

    def info(self, message):
        self.calls.append(("info", message))

    def clear_line(self):
        self.calls.append(("clear_line",))

    def report_progress(self, sent, total):
        self.calls.append(("progress", sent, total))

    @property
    def progress(self):
        return [call[1:] for call in self.calls if call[0] == "progress"]

    @property
    def percents(self):
        return [100 if total == 0 else round(sent / total * 100) for sent, total in self.progress]

    @property
    def messages(self):
        return [call[1] for call in self.calls if call[0] == "info"]


@pytest.fixture
def config():
    """Settings pointing at a fake box server"""
    return Settings(_env_file=None, box_server_url=SERVER_URL)


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def artifact():
    return ArtifactIdentity(name="acme_base_box", provider="virtualbox")


@pytest.fixture
def box_url():
    return f"{SERVER_URL}/acme/base/box"


@pytest.fixture
def box_file(tmp_path):
    """A 100 KB box file"""
    path = tmp_path / "package.box"
    path.write_bytes(b"\x1f\x8b" + b"x" * (100 * 1024 - 2))
    return path
