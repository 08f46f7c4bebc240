# Shared fixtures: headless Qt, isolated locale state and a ready-made store factory.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import i18n  # noqa: E402

from factories import FakeLocaleCatalog, FakePlatform, open_store  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_locale():
    previous = i18n.get_locale()
    yield
    i18n.set_locale(previous)


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "shared_preferences.json"


@pytest.fixture
def desktop():
    return FakePlatform()


@pytest.fixture
def catalog():
    return FakeLocaleCatalog()


@pytest.fixture
def store(settings_path, desktop, catalog):
    return open_store(settings_path, platform=desktop, locale_catalog=catalog)
