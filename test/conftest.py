from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

# Load dotenv files early so settings pick up CONFINEMENT_* overrides for tests
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    load_dotenv(TEST_ROOT / ".env", override=False)
except Exception:
    pass

from confinement.features.bundle import CapabilityBundleRegistry
from confinement.host.environment import StaticHost, use_environment


@pytest.fixture
def static_host() -> Iterator[StaticHost]:
    """Install an in-memory host as the process default for the test."""
    host = StaticHost(
        facts={"osfamily": "Debian", "kernel": "Linux", "is_root": False},
        paths={"/etc/hosts"},
        binaries={"apt-get": "/usr/bin/apt-get"},
        features={"posix"},
    )
    with use_environment(host):
        yield host


@pytest.fixture
def bundles() -> CapabilityBundleRegistry:
    """A bundle registry private to the test, so bundles never leak between tests."""
    return CapabilityBundleRegistry()
