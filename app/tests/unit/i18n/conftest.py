"""Feature-level fixtures for i18n system tests."""

import pytest
import yaml

from localization.i18n import YAMLBundleLoader
from tests.factories.i18n import make_bundle_data, make_loader, make_service


@pytest.fixture
def bundle_data():
    """Nested bundle data for en and fr."""
    return make_bundle_data()


@pytest.fixture
def memory_loader(bundle_data):
    """InMemoryBundleLoader over bundle_data."""
    return make_loader(bundle_data)


@pytest.fixture
def service(bundle_data):
    """LocalizationService with catalog [en, fr, router]."""
    return make_service(bundle_data)


@pytest.fixture
def temp_bundles_dir(tmp_path, bundle_data):
    """Create a temporary directory with YAML bundle files.

    Returns a directory containing:
    - bundle_en.yml
    - bundle_fr.yml
    - bundle_pt_BR.yml
    """
    for code, data in bundle_data.items():
        with open(tmp_path / f"bundle_{code}.yml", "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, allow_unicode=True)

    with open(tmp_path / "bundle_pt_BR.yml", "w", encoding="utf-8") as f:
        yaml.safe_dump({"logs": {"msg": "Nível: {0}"}}, f, allow_unicode=True)

    return tmp_path


@pytest.fixture
def yaml_loader(temp_bundles_dir):
    """YAMLBundleLoader for the temporary bundles directory."""
    return YAMLBundleLoader(temp_bundles_dir)
