"""Pytest configuration and fixtures for Ascend tests."""
import os
import tempfile
from datetime import date

import pytest

# app.py reads its configuration at import time, so point it at a scratch
# database before any test module imports it.
_TEST_DIR = tempfile.mkdtemp(prefix="ascend-test-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TEST_DIR, "ascend.db")
os.environ["PHOTO_DIR"] = os.path.join(_TEST_DIR, "photos")

# A Monday, so program day 1 (Push) and a weekday meal schedule
TODAY = date(2024, 1, 1)


@pytest.fixture(scope="function")
def test_app(tmp_path, monkeypatch):
    """Flask app with freshly created tables, a pinned date and a scratch photo dir."""
    import app as app_module
    from models import db

    monkeypatch.setattr(app_module, "get_today", lambda: TODAY)
    monkeypatch.setitem(app_module.app.config, "PHOTO_DIR", str(tmp_path / "photos"))
    app_module.app.config["TESTING"] = True

    with app_module.app.app_context():
        db.drop_all()
        db.create_all()

    yield app_module.app

    with app_module.app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(test_app):
    return test_app.test_client()


@pytest.fixture
def pin_today(monkeypatch):
    """Move the app's notion of today; returns a setter."""
    import app as app_module

    def pin(day):
        monkeypatch.setattr(app_module, "get_today", lambda: day)
    return pin
