# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the unit test directory."""

import pytest

from favicache.cache.memory import MemoryAdapter
from favicache.candidates import CandidateGenerator, ProviderMode
from favicache.driver import Link, ResolutionDriver
from favicache.resolution_cache import ResolutionCache


@pytest.fixture(name="adapter")
def fixture_adapter() -> MemoryAdapter:
    """Return an empty in-memory store adapter."""
    return MemoryAdapter()


@pytest.fixture(name="cache")
def fixture_cache(adapter: MemoryAdapter) -> ResolutionCache:
    """Return a resolution cache with the default policy on top of `adapter`."""
    return ResolutionCache(adapter)


@pytest.fixture(name="generator")
def fixture_generator() -> CandidateGenerator:
    """Return a candidate generator in `chain` mode."""
    return CandidateGenerator(ProviderMode.CHAIN)


@pytest.fixture(name="driver")
def fixture_driver(cache: ResolutionCache, generator: CandidateGenerator) -> ResolutionDriver:
    """Return a resolution driver wired to `cache` and `generator`."""
    return ResolutionDriver(cache, generator)


@pytest.fixture(name="link")
def fixture_link() -> Link:
    """Return a bookmark link."""
    return Link(id="42", url="https://www.example.com/path", title="Example")
