import re

from boxsave.config import Settings
from boxsave.models.artifact import ArtifactIdentity
from boxsave.services.uploader.errors import ServerNotConfigured

VMWARE_PROVIDER = "vmware_desktop"

_UNDERSCORE_RUN = re.compile(r"_+")


def normalize_provider(provider: str) -> str:
    """The box server indexes every vmware flavour under one provider name"""
    if "vmware" in provider:
        return VMWARE_PROVIDER
    return provider


def join_url(base: str, *segments: str) -> str:
    return "/".join([base.rstrip("/"), *segments])


def build_box_url(artifact: ArtifactIdentity, config: Settings) -> str:
    """
    Resource URL of a box on the server.

    ``org_name_box`` on ``http://boxes`` becomes ``http://boxes/org/name/box``.
    """
    base_url = (config.box_server_url or "").strip()
    if not base_url:
        raise ServerNotConfigured()

    return join_url(base_url, _UNDERSCORE_RUN.sub("/", artifact.name))
