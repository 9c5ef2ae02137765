from datetime import UTC, date, datetime, timedelta
import uuid


def iso_now() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix.

    The fixed width keeps lexicographic order equal to chronological order,
    which the listing and adjacency queries rely on.
    """
    return format_timestamp(datetime.now(UTC))


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def today_utc() -> date:
    return datetime.now(UTC).date()


def new_id() -> str:
    return uuid.uuid4().hex


def day_bounds(day: date) -> tuple[str, str]:
    """Half-open ``[start, end)`` timestamp range covering one UTC calendar day."""
    start = datetime(day.year, day.month, day.day, tzinfo=UTC)
    return format_timestamp(start), format_timestamp(start + timedelta(days=1))
