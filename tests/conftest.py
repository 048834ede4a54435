from typing import Generator

import pytest

from config import config
from tests.helpers.stub_quoter import StubQuoter


@pytest.fixture(autouse=True)
def _reset_config_cache() -> Generator[None, None, None]:
    config.cache_clear()
    yield
    config.cache_clear()


@pytest.fixture(scope="function")
def stub_quoter() -> StubQuoter:
    return StubQuoter(amount_out=1_234_567_890)
