"""Pure formatting functions for category distributions."""

import re
from typing import Hashable, Mapping

from facilitator_stats.models.category import is_unset

# Marker shown when a distribution has nothing to display.
NO_DATA = "—"

NOT_SET_LABEL = "Not set"


def humanize_machine_name(value: str | None) -> str:
    """Turn a machine name into a readable label.

    Args:
        value: Machine name (e.g., "no_show", "follow-up").

    Returns:
        Label with separators replaced and words capitalized
        (e.g., "No Show", "Follow Up"), or "Not set" for blank values.
    """
    if is_unset(value):
        return NOT_SET_LABEL
    text = re.sub(r"\s+", " ", re.sub(r"[_-]", " ", str(value))).strip()
    if not text:
        return NOT_SET_LABEL
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def distribution_label(key: Hashable, labels: Mapping | None = None) -> str:
    """Label for a distribution key; unset keys are always "Not set"."""
    if is_unset(key):
        return NOT_SET_LABEL
    if labels:
        label = labels.get(key)
        if label is None and not isinstance(key, str):
            label = labels.get(str(key))
        if label is not None:
            return str(label)
    return humanize_machine_name(str(key))


def sorted_distribution(counts: Mapping) -> list[tuple]:
    """Items sorted by count, highest first; ties keep insertion order."""
    return sorted(counts.items(), key=lambda item: -item[1])


def _has_data(counts: Mapping | None) -> bool:
    return bool(counts) and any(value > 0 for value in counts.values())


def format_distribution(counts: Mapping | None, labels: Mapping | None = None) -> str:
    """Format counts as "<count> <label>" pairs joined by commas.

    Returns:
        e.g. "3 Intro, 1 Not set", or NO_DATA for empty input.
    """
    if not _has_data(counts):
        return NO_DATA
    return ", ".join(
        f"{value} {distribution_label(key, labels)}"
        for key, value in sorted_distribution(counts)
    )


def format_distribution_list(
    counts: Mapping | None,
    labels: Mapping | None = None,
    include_value: bool = False,
) -> list[str]:
    """Format counts as list items.

    Args:
        counts: Category -> count mapping.
        labels: Optional code -> label mapping.
        include_value: Lead with the count ("3 Intro") instead of
            trailing it ("Intro (3)").

    Returns:
        List of items, or [NO_DATA] for empty input.
    """
    if not _has_data(counts):
        return [NO_DATA]
    items = []
    for key, value in sorted_distribution(counts):
        label = distribution_label(key, labels)
        items.append(f"{value} {label}" if include_value else f"{label} ({value})")
    return items


def result_percentages(
    counts: Mapping | None, labels: Mapping | None = None
) -> list[tuple[str, float, int]]:
    """Share of each recorded result, ignoring the "not set" bucket.

    Returns:
        (label, percentage, count) tuples, highest count first. The
        percentage is rounded to one decimal. Empty if nothing is recorded.
    """
    if not counts:
        return []
    recorded = {
        key: value for key, value in counts.items() if value > 0 and not is_unset(key)
    }
    total = sum(recorded.values())
    if total == 0:
        return []
    return [
        (distribution_label(key, labels), round(value / total * 100, 1), value)
        for key, value in sorted_distribution(recorded)
    ]


def format_result_percentages(
    counts: Mapping | None, labels: Mapping | None = None
) -> list[str]:
    """Format the result mix as "<pct>% (<count>) <label>" items."""
    shares = result_percentages(counts, labels)
    if not shares:
        return [NO_DATA]
    return [f"{percentage:.1f}% ({count}) {label}" for label, percentage, count in shares]


def format_top_badges(
    badge_counts: Mapping[int, int] | None,
    badge_labels: Mapping[int, str] | None = None,
    limit: int | None = 3,
) -> list[str]:
    """Most selected badges as "<count> <label>" items.

    Unknown badges are shown as "Badge <id>".
    """
    if not _has_data(badge_counts):
        return [NO_DATA]
    ranked = sorted_distribution(badge_counts)
    if limit is not None:
        ranked = ranked[:limit]
    badge_labels = badge_labels or {}
    return [
        f"{count} {badge_labels.get(badge_id, f'Badge {badge_id}')}"
        for badge_id, count in ranked
    ]
