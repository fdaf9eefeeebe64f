from __future__ import annotations

import typing

from rich.markup import escape

from hacktoberfest_checker import console
from hacktoberfest_checker import pipeline


if typing.TYPE_CHECKING:
    from hacktoberfest_checker import config


GITHUB_URL = "https://github.com"
ISSUES_URL = (
    "https://github.com/search?q=label:hacktoberfest+state:open+type:issue"
)


def get_profile_url(login: str) -> str:
    return f"{GITHUB_URL}/{login}"


def display_state(
    state: pipeline.PipelineState,
    thresholds: config.Thresholds,
) -> None:
    """Display a finished pipeline run in human-readable format."""
    if state.status is pipeline.Status.ERRORED:
        console.print(f"error: {escape(state.error_message or '')}", style="red")
        return

    result = state.result
    if result is None:
        console.print("Still loading…", style="dim")
        return

    console.print(
        f"\n[bold]{escape(result.user_login)}[/] ({get_profile_url(result.user_login)})",
    )
    console.print(f"Avatar: {result.user_avatar}\n", style="dim")
    console.print(
        f"Pull requests: [bold]{result.total_count}[/] / {thresholds.min_pr_count}",
    )
    console.print(
        f"Other repositories: [bold]{result.other_repos_count}[/] / {thresholds.min_other_repos_count}",
    )

    if result.completed:
        console.print("Status: [green]completed[/]\n")
    else:
        console.print("Status: [yellow]not completed yet[/]\n")

    for item in result.items:
        title = escape(item.title or "<untitled>")
        state_text = item.state or "unknown"
        url = item.html_url or item.repository_url
        console.print(f"* [cyan]\\[{state_text}][/] {title}")
        console.print(f"  {url}")

    if not result.completed:
        console.print(f"\nLooking for something to work on? {ISSUES_URL}")
