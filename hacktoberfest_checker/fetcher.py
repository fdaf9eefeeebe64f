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

from __future__ import annotations

import asyncio
import typing

import httpx
import pydantic

from hacktoberfest_checker import exceptions
from hacktoberfest_checker import github_types


if typing.TYPE_CHECKING:
    from hacktoberfest_checker import config


ModelT = typing.TypeVar("ModelT", bound=pydantic.BaseModel)


def _check_username(username: str) -> None:
    if not username.strip():
        msg = "username must not be empty"
        raise ValueError(msg)


async def _search(
    client: httpx.AsyncClient,
    url: str,
    query: str,
    model: type[ModelT],
) -> ModelT:
    try:
        response = await client.get(url, params={"q": query})
    except httpx.HTTPError as e:
        msg = f"request to {url} failed: {e}"
        raise exceptions.TransportError(msg) from e

    try:
        data = response.json()
    except ValueError as e:
        msg = f"{url} returned a malformed payload: {e}"
        raise exceptions.DecodeError(msg) from e

    if isinstance(data, dict) and data.get("errors"):
        try:
            payload = github_types.ErrorPayload.model_validate(data)
        except pydantic.ValidationError as e:
            msg = f"{url} returned unreadable errors: {e}"
            raise exceptions.DataShapeError(msg) from e
        raise exceptions.TransportError(
            payload.message or "search returned errors",
            response.status_code,
            payload,
        )

    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        msg = f"{url} returned an unexpected payload: {e}"
        raise exceptions.DataShapeError(msg) from e


async def search_pull_requests(
    client: httpx.AsyncClient,
    username: str,
    window: config.ContestWindow,
) -> github_types.PullRequestSearchResult:
    _check_username(username)
    return await _search(
        client,
        "/search/issues",
        f"author:{username} is:pr created:{window.created_range}",
        github_types.PullRequestSearchResult,
    )


async def search_users(
    client: httpx.AsyncClient,
    username: str,
) -> github_types.UserSearchResult:
    _check_username(username)
    return await _search(
        client,
        "/search/users",
        f"user:{username}",
        github_types.UserSearchResult,
    )


async def fetch_all(
    client: httpx.AsyncClient,
    username: str,
    window: config.ContestWindow,
) -> tuple[github_types.PullRequestSearchResult, github_types.UserSearchResult]:
    # NOTE: return_exceptions keeps one failing lookup from cancelling the
    # other one, both must settle before we report anything.
    pull_requests, user_detail = await asyncio.gather(
        search_pull_requests(client, username, window),
        search_users(client, username),
        return_exceptions=True,
    )
    if isinstance(pull_requests, BaseException):
        raise pull_requests
    if isinstance(user_detail, BaseException):
        raise user_detail
    return pull_requests, user_detail
