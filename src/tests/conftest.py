import pytest

from poolform._internal import settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "acceptance: mark test as running against a real workspace, requires CLOUD_ENV"
    )


def pytest_collection_modifyitems(config, items):
    skip_acceptance = pytest.mark.skip(
        reason="Acceptance tests skipped unless env 'CLOUD_ENV' is set"
    )
    for item in items:
        if "acceptance" in item.keywords and not settings.CLOUD_ENV:
            item.add_marker(skip_acceptance)
