"""Timezone-aware clock helper; stored timestamps are always UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)
