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
import datetime
import json
import os
import subprocess
import sys

import click
import click_default_group

from hacktoberfest_checker import VERSION
from hacktoberfest_checker import config as config_mod
from hacktoberfest_checker import console
from hacktoberfest_checker import pipeline
from hacktoberfest_checker import report
from hacktoberfest_checker import utils


async def _get_default_token() -> str | None:
    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        try:
            token = await utils.run_command("gh", "auth", "token")
        except utils.CommandError:
            console.print(
                "error: please set the 'GITHUB_TOKEN' environment variable, "
                "or make sure that gh client is installed and you are authenticated",
                style="red",
            )
            return None
    return token


def _load_config(
    config_path: str | None,
    github_server: str | None,
    start: datetime.datetime | None,
    end: datetime.datetime | None,
) -> config_mod.Config:
    try:
        configuration = (
            config_mod.Config.from_yaml(config_path)
            if config_path is not None
            else config_mod.Config()
        )
    except config_mod.ConfigInvalidError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e

    update: dict[str, object] = {}
    if github_server is not None:
        update["github_server"] = github_server
    if start is not None or end is not None:
        window = configuration.contest_window.model_dump()
        if start is not None:
            window["start"] = start.date()
        if end is not None:
            window["end"] = end.date()
        try:
            update["contest_window"] = config_mod.ContestWindow.model_validate(window)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--start/--end") from e

    return configuration.model_copy(update=update) if update else configuration


@click.group(
    cls=click_default_group.DefaultGroup,
    default="check",
)
@click.option("--debug", is_flag=True, default=False, help="debug mode")
@click.version_option(VERSION)
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
) -> None:
    ctx.obj = {"debug": debug}
    utils.set_debug(debug)


@cli.command(help="Check the contest progress of a GitHub user")
@click.argument("username")
@click.option(
    "--token",
    "-t",
    help="GitHub personal access token",
    envvar="GITHUB_TOKEN",
    required=True,
    default=lambda: asyncio.run(_get_default_token()),
)
@click.option(
    "--github-server",
    "-s",
    help="GitHub API server URL (default: from config or https://api.github.com)",
    envvar="GITHUB_API_URL",
    default=None,
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="First day of the contest window (YYYY-MM-DD)",
)
@click.option(
    "--end",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Last day of the contest window (YYYY-MM-DD)",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output in JSON format",
)
@utils.run_with_asyncio
async def check(  # noqa: PLR0913, PLR0917
    username: str,
    token: str,
    github_server: str | None,
    config_path: str | None,
    start: datetime.datetime | None,
    end: datetime.datetime | None,
    output_json: bool,
) -> None:
    if not username.strip():
        msg = "username must not be empty"
        raise click.BadParameter(msg, param_hint="USERNAME")

    configuration = _load_config(config_path, github_server, start, end)

    async with utils.get_github_http_client(
        configuration.github_server,
        token,
    ) as client:
        state = await pipeline.Pipeline(client, configuration).fetch(username)

    if output_json:
        click.echo(
            json.dumps({**state.to_dict(), "completed": state.completed}, indent=2),
        )
    else:
        report.display_state(state, configuration.thresholds)

    if state.status is pipeline.Status.ERRORED:
        sys.exit(1)


def enforce_utf8_mode() -> None:
    if sys.flags.utf8_mode:
        return

    argv = [sys.executable, "-X", "utf8"]
    argv.extend(subprocess._args_from_interpreter_flags())  # type: ignore[attr-defined]  # noqa: SLF001
    argv.extend(sys.argv)

    os.execv(argv[0], argv)  # noqa: S606


def main() -> None:
    # NOTE:
    #   It's unlikely this day that a platform does not support unicode.
    #   But on windows, the default encoding may not be an unicode one.
    #   Let's try our best by forcing utf-8 and if it's impossible, just returns escaped character
    if os.name == "nt":
        enforce_utf8_mode()
    cli()
