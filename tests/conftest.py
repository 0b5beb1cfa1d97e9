import os

import pytest

from snowsync.enums import AccountEdition
from tests.helpers import FakeAccount, fake_config


def pytest_collection_modifyitems(config, items):
    if os.environ.get("TEST_SNOWFLAKE_ACCOUNT"):
        return
    skip = pytest.mark.skip(reason="TEST_SNOWFLAKE_ACCOUNT is not set")
    for item in items:
        if "requires_snowflake" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def account():
    return FakeAccount()


@pytest.fixture
def config(account):
    return fake_config(account)


@pytest.fixture
def enterprise_config(account):
    return fake_config(account, edition=AccountEdition.ENTERPRISE)
