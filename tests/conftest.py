"""Pytest fixtures for the site topology tests."""

import pytest

from config import EnvConfig
from topology.builder import build_topology
from topology.zone_resolver import StaticZoneResolver

ZONE_ID = "Z0123456789ABCDEFGHIJ"
ACCOUNT = "123456789012"


@pytest.fixture
def resolver() -> StaticZoneResolver:
    return StaticZoneResolver(ZONE_ID)


@pytest.fixture
def topology(resolver):
    return build_topology("example.org", resolver)


@pytest.fixture
def env_config() -> EnvConfig:
    return EnvConfig(
        env_name="test",
        account=ACCOUNT,
        region="eu-west-1",
        domain="example.org",
    )
