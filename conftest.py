import os

import pytest

# Unit tests never hit the real endpoint; scrub proxy env so requests stays local
for k in ("HTTP_PROXY", "HTTPS_PROXY", "http_proxy", "https_proxy"):
    os.environ.pop(k, None)


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run tests marked as integration (talk to the live endpoint)",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: mark tests as integration (needs network)"
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip_it = pytest.mark.skip(reason="need --run-integration to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_it)
