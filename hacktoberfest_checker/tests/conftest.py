#
#  Copyright © 2021-2024 Mergify SAS
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License. You may obtain
# a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.
import typing

import httpx
import pytest

from hacktoberfest_checker import utils
from hacktoberfest_checker.tests import utils as test_utils


@pytest.fixture(autouse=True)
def _github_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "whatever")
    monkeypatch.delenv("GITHUB_API_URL", raising=False)


@pytest.fixture(autouse=True)
def _reset_debug() -> typing.Generator[None, None, None]:
    yield
    utils.set_debug(False)


@pytest.fixture
async def client() -> typing.AsyncGenerator[httpx.AsyncClient, None]:
    async with utils.get_github_http_client(test_utils.GITHUB_API, "secret") as c:
        yield c
