import csv

import pytest

import config
from db import init_db, get_session
from main import create_app


@pytest.fixture(autouse=True)
def _temp_uploads(tmp_path, monkeypatch):
    """Point UPLOAD_DIR at a per-test temporary directory."""
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()
    monkeypatch.setattr(config, "UPLOAD_DIR", upload_dir)
    return upload_dir


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.sqlite'}"


@pytest.fixture
def db(db_url):
    """Fresh, empty database for one test."""
    init_db(db_url)


@pytest.fixture
def session(db):
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def app(db_url):
    app = create_app(db_url)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def make_csv(_temp_uploads):
    """Write header + rows to a CSV file in the upload dir and return its path."""
    counter = {"n": 0}

    def _make(header, rows, name=None):
        counter["n"] += 1
        path = _temp_uploads / (name or f"upload-{counter['n']}.csv")
        with open(path, "w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(header)
            writer.writerows(rows)
        return path

    return _make
