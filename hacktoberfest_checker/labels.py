from __future__ import annotations

import typing


if typing.TYPE_CHECKING:
    from collections import abc

    from hacktoberfest_checker import github_types


EligibilityPredicate = typing.Callable[[frozenset[str]], bool]

DEFAULT_INELIGIBLE_LABELS = ("spam",)
INVALID_LABEL = "invalid"


def make_eligibility_predicate(
    ineligible_labels: abc.Iterable[str],
) -> EligibilityPredicate:
    """Build a predicate rejecting any label set with an ineligible label.

    Label names are compared case-insensitively.
    """
    rejected = frozenset(name.lower() for name in ineligible_labels)

    def predicate(label_names: frozenset[str]) -> bool:
        return not any(name.lower() in rejected for name in label_names)

    return predicate


is_pr_label_valid = make_eligibility_predicate(DEFAULT_INELIGIBLE_LABELS)


def filter_eligible(
    items: abc.Iterable[github_types.PullRequestItem],
    predicate: EligibilityPredicate = is_pr_label_valid,
) -> list[github_types.PullRequestItem]:
    return [item for item in items if predicate(item.label_names)]


def has_invalid_label(item: github_types.PullRequestItem) -> bool:
    return any(label.name.lower() == INVALID_LABEL for label in item.labels)


def filter_valid(
    result: github_types.PullRequestSearchResult,
) -> github_types.PullRequestSearchResult:
    """Drop pull requests labeled "invalid" and recount what's left."""
    items = [item for item in result.items if not has_invalid_label(item)]
    return result.model_copy(update={"items": items, "total_count": len(items)})
