import pytest

from health_viz.config import settings
from health_viz.core import ingest
from health_viz.core.records import InvalidRecord
from health_viz.data_access.dal import PersistenceFailure
from health_viz.data_access.json_dal import JsonDal


class FakePostgresDal:
    instances = []

    def __init__(self, fail: bool = False):
        self.schema_ready = False
        self.fail = fail
        FakePostgresDal.instances.append(self)

    def init_schema(self) -> None:
        if self.fail:
            raise PersistenceFailure("connection refused")
        self.schema_ready = True


@pytest.fixture
def production(monkeypatch):
    FakePostgresDal.instances = []
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(settings, "DATABASE_URL", "postgresql://u:p@localhost:5432/health")


def test_get_dal_creates_postgres_table(production, monkeypatch):
    monkeypatch.setattr(ingest, "PostgresDal", FakePostgresDal)
    dal = ingest.get_dal()
    assert isinstance(dal, FakePostgresDal)
    assert dal.schema_ready


def test_get_dal_falls_back_to_json_when_schema_fails(production, monkeypatch):
    monkeypatch.setattr(ingest, "PostgresDal", lambda: FakePostgresDal(fail=True))
    dal = ingest.get_dal()
    assert isinstance(dal, JsonDal)
    assert "Falling back to JSON" in settings.log_path.read_text(encoding="utf-8")


def test_get_dal_defaults_to_json(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
    monkeypatch.setattr(ingest, "PostgresDal", FakePostgresDal)
    FakePostgresDal.instances = []
    assert isinstance(ingest.get_dal(), JsonDal)
    assert FakePostgresDal.instances == []


def test_ingest_rejects_before_writing(tmp_path):
    dal = JsonDal(tmp_path / "store.json")
    with pytest.raises(InvalidRecord):
        ingest.ingest_record(dal, {"date": "2025-02-30", "steps": "10"})
    assert not (tmp_path / "store.json").exists()
