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
import dataclasses
import functools
import typing

import httpx
import pydantic

from hacktoberfest_checker import VERSION
from hacktoberfest_checker import console
from hacktoberfest_checker import exceptions
from hacktoberfest_checker import github_types


_DEBUG = False


def set_debug(debug: bool) -> None:
    global _DEBUG  # noqa: PLW0603
    _DEBUG = debug


def is_debug() -> bool:
    return _DEBUG


def debug(message: str) -> None:
    if is_debug():
        console.print(f"[purple]DEBUG: {message}[/]")


def _decode_error_payload(response: httpx.Response) -> github_types.ErrorPayload | None:
    try:
        return github_types.ErrorPayload.model_validate(response.json())
    except (ValueError, pydantic.ValidationError):
        return None


async def check_for_status(response: httpx.Response) -> None:
    if response.status_code < 400:
        return

    await response.aread()
    payload = _decode_error_payload(response)
    message = (
        payload.message
        if payload is not None and payload.message
        else response.reason_phrase
    )
    if is_debug():
        console.print(f"url: {response.request.url}", style="red")
        console.print(
            f"HTTPError {response.status_code}: {message}",
            style="red",
        )
        if payload is not None and payload.errors:
            console.print(
                "\n".join(f"* {e.message or e}" for e in payload.errors),
                style="red",
            )

    raise exceptions.TransportError(message, response.status_code, payload)


@dataclasses.dataclass
class CommandError(Exception):
    command_args: tuple[str, ...]
    returncode: int | None
    stdout: bytes

    def __str__(self) -> str:
        return f"failed to run `{' '.join(self.command_args)}`: {self.stdout.decode()}"


async def run_command(*args: str) -> str:
    debug(f"running: {' '.join(args)}")
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except FileNotFoundError as e:
        raise CommandError(args, None, str(e).encode()) from e
    stdout, _ = await proc.communicate()
    if proc.returncode != 0:
        raise CommandError(args, proc.returncode, stdout)
    return stdout.decode().strip()


# NOTE: must be async for httpx
async def log_httpx_request(request: httpx.Request) -> None:  # noqa: RUF029
    console.print(
        f"[purple]DEBUG: request: {request.method} {request.url} - Waiting for response[/]",
    )


# NOTE: must be async for httpx
async def log_httpx_response(response: httpx.Response) -> None:
    request = response.request
    await response.aread()
    elapsed = response.elapsed.total_seconds()
    console.print(
        f"[purple]DEBUG: response: {request.method} {request.url} - Status {response.status_code} - Elasped {elapsed} s[/]",
    )


def get_github_http_client(github_server: str, token: str) -> httpx.AsyncClient:
    event_hooks: typing.Mapping[str, list[typing.Callable[..., typing.Any]]] = {
        "request": [],
        "response": [check_for_status],
    }
    if is_debug():
        event_hooks["request"].insert(0, log_httpx_request)
        event_hooks["response"].insert(0, log_httpx_response)

    return httpx.AsyncClient(
        base_url=github_server,
        headers={
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": f"hacktoberfest_checker/{VERSION}",
            "Authorization": f"token {token}",
        },
        event_hooks=event_hooks,
        follow_redirects=True,
        timeout=5.0,
    )


P = typing.ParamSpec("P")
R = typing.TypeVar("R")


def run_with_asyncio(
    func: typing.Callable[
        P,
        typing.Coroutine[typing.Any, typing.Any, R],
    ],
) -> typing.Callable[P, R]:
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        result = func(*args, **kwargs)
        return asyncio.run(result)

    return wrapper
