"""Shared fixtures for the sync core tests."""

from datetime import date

import pytest

from scrapconnect.cache import LocalCacheStore
from scrapconnect.config_loader import load_all_configs
from scrapconnect.gateway import MockGateway, RemoteGateway, RemoteUnavailable
from scrapconnect.notifier import CollectingNotifier
from scrapconnect.service import ReconcilingDataService


class StubGateway(RemoteGateway):
    """Gateway returning canned data per action; records every call."""

    def __init__(self, responses=None):
        super().__init__(base_url="https://example.com/exec")
        self.responses = responses or {}
        self.calls = []

    def _call(self, action, method, payload):
        self.calls.append((action, method, payload))
        response = self.responses.get(action)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise RemoteUnavailable("no stub for action")
        return response


class Counter:
    def __init__(self):
        self.n = 0

    def __call__(self):
        self.n += 1
        return f"LOCAL{self.n}"


@pytest.fixture
def configs():
    return load_all_configs()


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def cache(tmp_path):
    return LocalCacheStore(str(tmp_path / "cache"))


def make_service(gateway, cache, configs, notifier):
    return ReconcilingDataService(
        gateway=gateway,
        cache=cache,
        seed_listings=configs.seed_listings,
        notifier=notifier,
        pricing=configs.pricing,
        id_generator=Counter(),
        today=lambda: date(2025, 8, 20),
    )


@pytest.fixture
def offline_service(cache, configs, notifier):
    return make_service(MockGateway(), cache, configs, notifier)
