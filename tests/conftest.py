"""Shared fixtures: isolate tests from any user config file or env vars."""

import pytest

from registered_attributes.config import AttributesConfig, configure, reset_config

# Module-level classes in test modules are defined at collection time
configure(AttributesConfig())


@pytest.fixture(autouse=True)
def default_config():
    config = AttributesConfig()
    configure(config)
    yield config
    configure(AttributesConfig())
