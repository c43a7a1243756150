from pathlib import Path
from unittest.mock import Mock

import pytest
import requests_mock

from boxsave.services.uploader import (
    BoxSaveService,
    BoxUploader,
    ConsoleProgressReporter,
    ServerUnreachable,
    UploadServiceBuilder,
    VersionCleaner,
)


class TestBoxSaveService:
    def test_save_without_keep_skips_cleanup(self, artifact):
        uploader, cleaner = Mock(), Mock()
        uploader.send.return_value = "virtualbox"

        service = BoxSaveService(uploader, cleaner)

        assert service.save(artifact, "package.box", "1.0.0") == "virtualbox"
        uploader.send.assert_called_once_with(artifact, "package.box", "1.0.0")
        cleaner.clean.assert_not_called()

    def test_save_with_keep_cleans_after_upload(self, artifact):
        uploader, cleaner = Mock(), Mock()
        uploader.send.return_value = "vmware_desktop"

        service = BoxSaveService(uploader, cleaner)

        assert service.save(artifact, "package.box", "1.0.0", keep=2) == "vmware_desktop"
        cleaner.clean.assert_called_once_with(artifact, 2)

    def test_failed_upload_skips_cleanup(self, artifact):
        uploader, cleaner = Mock(), Mock()
        uploader.send.side_effect = ServerUnreachable("http://boxes.example.com/acme/base/box", 503)

        with pytest.raises(ServerUnreachable):
            BoxSaveService(uploader, cleaner).save(artifact, "package.box", "1.0.0", keep=2)

        cleaner.clean.assert_not_called()


class TestUploadServiceBuilder:
    def test_build_wires_components(self, config, reporter):
        service = UploadServiceBuilder.build(config, reporter)

        assert isinstance(service.uploader, BoxUploader)
        assert isinstance(service.cleaner, VersionCleaner)
        assert service.uploader.config is config
        assert service.cleaner.reporter is reporter

    def test_build_defaults_to_console_reporter(self, config):
        service = UploadServiceBuilder.build(config)
        assert isinstance(service.uploader.reporter, ConsoleProgressReporter)

    def test_end_to_end(self, config, reporter, artifact, box_file, box_url):
        def _accept(request, context):
            while request.body.read(8192):
                pass
            return "ok"

        with requests_mock.Mocker() as m:
            m.options(box_url, status_code=200)
            m.post(f"{box_url}/1.3.0/virtualbox", text=_accept)
            m.get(box_url, json={"versions": [{"version": v} for v in ["1.1.0", "1.2.0", "1.3.0"]]})
            m.delete(f"{box_url}/1.1.0", status_code=200)

            service = UploadServiceBuilder.build(config, reporter)
            assert service.save(artifact, str(box_file), "1.3.0", keep=2) == "virtualbox"

            assert [r.method for r in m.request_history] == ["OPTIONS", "POST", "GET", "DELETE"]


def test_package_version_matches_project():
    tomllib = pytest.importorskip("tomllib")
    from boxsave.services.uploader import __version__

    pyproject = Path(__file__).parents[2] / "pyproject.toml"
    with open(pyproject, "rb") as f:
        assert tomllib.load(f)["project"]["version"] == __version__
