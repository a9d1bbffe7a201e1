from __future__ import annotations

import pytest

from milk_imagegen.image import storage

_SETTINGS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "PROVIDER",
    "IMAGE_PROVIDER",
    "IMAGE_SAVE_REMOTE",
    "IMAGE_OUTPUT_DIR",
    "SMALL_MODEL",
    "MEDIUM_MODEL",
    "LARGE_MODEL",
)


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, content=b"", reason="OK", text=""):
        self.status_code = status_code
        self._json = json_data
        self.content = content
        self.reason = reason
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        return self._json

    def raise_for_status(self) -> None:
        import requests

        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    for key in _SETTINGS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(storage, "IMAGE_DIR", str(tmp_path / "images" / "lora"))


@pytest.fixture
def image_dir(tmp_path):
    return tmp_path / "images" / "lora"
