import json
import shlex
from pathlib import Path

import pytest
from PIL import Image

import journey_report.metadata.extract as extract_module
import journey_report.thumbnails.batch as batch_module


def make_jpeg(path: Path, size=(64, 48), color="red") -> Path:
    with Image.new("RGB", size, color=color) as im:
        im.save(path)
    return path


@pytest.fixture
def exif_tags(monkeypatch):
    """
    Replaces exifread with a lookup by filename.

    Tests fill the returned dict: {"a.jpg": {"EXIF DateTimeOriginal": "..."}}.
    Files not in the dict have no metadata.
    """
    tags_by_name = {}

    def fake_process_file(fh, details=True, **kwargs):
        return dict(tags_by_name.get(Path(fh.name).name, {}))

    monkeypatch.setattr(extract_module.exifread, "process_file", fake_process_file)
    return tags_by_name


def capture_tags(raw: str) -> dict:
    return {
        "Image Make": "TestCam",
        "EXIF ExposureTime": "1/125",
        "EXIF DateTimeOriginal": raw,
    }


class FakeGM:
    """
    Stands in for subprocess.Popen running 'gm batch'.

    Writes each directive's destination file, like GraphicsMagick would.
    """

    def __init__(self, returncode=0, stderr="", launch_error=None, write_outputs=True):
        self.returncode_on_exit = returncode
        self.stderr = stderr
        self.launch_error = launch_error
        self.write_outputs = write_outputs
        self.calls = []

    def __call__(self, cmd, **kwargs):
        if self.launch_error is not None:
            raise self.launch_error
        self.calls.append({"cmd": cmd, "kwargs": kwargs, "input": None})
        return _FakeProcess(self)


class _FakeProcess:
    def __init__(self, gm: FakeGM):
        self.gm = gm
        self.returncode = None

    def communicate(self, input=None):
        self.gm.calls[-1]["input"] = input
        if self.gm.write_outputs:
            for line in (input or "").splitlines():
                Path(shlex.split(line)[-1]).write_bytes(b"thumbnail")
        self.returncode = self.gm.returncode_on_exit
        return "", self.gm.stderr


@pytest.fixture
def fake_gm(monkeypatch):
    gm = FakeGM()
    monkeypatch.setattr(batch_module.subprocess, "Popen", gm)
    return gm


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"gmPath": "gm"}), encoding="utf-8")
    return path


@pytest.fixture
def photo_dir(tmp_path):
    root = tmp_path / "journey"
    root.mkdir()
    return root
