from typing import Optional


class BoxSaveError(Exception):
    """Base class for box server client failures"""


class ServerNotConfigured(BoxSaveError):
    def __init__(self):
        super().__init__("No box server URL configured (set BOX_SERVER_URL)")


class ServerUnreachable(BoxSaveError):
    def __init__(self, url: str, status: Optional[int] = None):
        self.url = url
        self.status = status
        detail = f"status {status}" if status is not None else "no response"
        super().__init__(f"Cannot contact box server at {url} ({detail})")


class UploadFailed(BoxSaveError):
    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"Upload to {url} failed with status {status}")


class ListingFailed(BoxSaveError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not load versions from {url}: {reason}")
