import pytest

from health_viz.config import settings


@pytest.fixture(autouse=True)
def isolated_root(tmp_path, monkeypatch):
    # Keep data files and logs inside the per-test temp directory
    monkeypatch.setattr(settings, "PROJECT_ROOT", tmp_path)
    return tmp_path
