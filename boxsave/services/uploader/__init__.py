"""
Uploader Service Package

Publishes exported boxes to a box server and prunes old versions.

Key Components:
- ProgressReporter: Abstract UI surface for upload messages and progress
- BoxUploader: Streams a box file to the server with progress reporting
- VersionCleaner: Deletes versions beyond a retention count
- BoxSaveService: Upload-then-clean orchestration
- UploadServiceBuilder: Dependency injection helper
"""

from .interfaces import ProgressReporter
from .errors import BoxSaveError, ServerNotConfigured, ServerUnreachable, UploadFailed, ListingFailed
from .urls import build_box_url, normalize_provider
from .progress import ConsoleProgressReporter, ProgressTracker, next_progress
from .cleaner import VersionCleaner, prune_versions
from .upload_service import BoxSaveService
from .box_uploader import BoxUploader, UploadServiceBuilder

__all__ = [
    # Interfaces
    'ProgressReporter',

    # Errors
    'BoxSaveError',
    'ServerNotConfigured',
    'ServerUnreachable',
    'UploadFailed',
    'ListingFailed',

    # Implementations
    'build_box_url',
    'normalize_provider',
    'next_progress',
    'ProgressTracker',
    'ConsoleProgressReporter',
    'BoxUploader',
    'VersionCleaner',
    'prune_versions',

    # Services
    'BoxSaveService',
    'UploadServiceBuilder'
]

# Package version
__version__ = "0.1.0"
