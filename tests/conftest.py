import base64
import io

import pytest
from PIL import Image


class RecordingRenderer:
    """Stands in for the symbol renderer and records every call."""

    def __init__(self):
        self.initialized = []
        self.updates = []
        self.exports = []

    def initialize(self, config):
        self.initialized.append(config)
        return "handle-1"

    def update(self, handle, config):
        assert handle == "handle-1"
        self.updates.append(config)

    def export(self, handle, fmt):
        self.exports.append(fmt)
        return None


@pytest.fixture
def renderer():
    return RecordingRenderer()


def png_data_uri(size=(32, 32), color=(200, 30, 30, 255)):
    buf = io.BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def logo_uri():
    return png_data_uri()


@pytest.fixture
def logo_file(tmp_path):
    path = tmp_path / "logo.png"
    Image.new("RGB", (64, 48), (10, 120, 200)).save(path)
    return path
