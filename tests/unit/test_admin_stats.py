import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.exceptions import ValidationError
from inkblog.db.models import Comment, ViewLog
from inkblog.db.repositories import like_repository, post_repository
from inkblog.db.utils import today_utc
from inkblog.services import admin_service
from tests.factories.posts import create_post

DEVICE = "device_1700000000000_abc123"


@pytest.mark.unit
@pytest.mark.parametrize("value", ["2024/01/01", "yesterday", "2024-13-01", "2024-02-30", "20240101"])
def test_stats_date_must_be_iso_day(value):
    with pytest.raises(ValidationError):
        admin_service.parse_stats_date(value)


@pytest.mark.unit
def test_stats_date_defaults_to_today():
    assert admin_service.parse_stats_date(None) == today_utc()
    assert admin_service.parse_stats_date(" ").isoformat() == today_utc().isoformat()
    assert admin_service.parse_stats_date("2024-02-29").isoformat() == "2024-02-29"


@pytest.mark.unit
@pytest.mark.anyio
async def test_stats_for_a_given_day(db_session: AsyncSession):
    day = "2024-03-10"
    busy = await create_post(db_session, title="Busy", created_at=f"{day}T08:00:00.000Z")
    calm = await create_post(db_session, title="Calm", created_at="2024-03-09T08:00:00.000Z")

    for minute in range(3):
        db_session.add(ViewLog(post_id=busy.id, created_at=f"{day}T09:0{minute}:00.000Z"))
    db_session.add(ViewLog(post_id=calm.id, created_at=f"{day}T10:00:00.000Z"))
    db_session.add(ViewLog(post_id=calm.id, created_at="2024-03-11T00:00:00.000Z"))
    db_session.add(
        Comment(id="c1", post_id=busy.id, content="hi", floor=1, device_id=DEVICE, created_at=f"{day}T11:00:00.000Z")
    )
    db_session.add(
        Comment(id="c0", post_id=calm.id, content="old", floor=1, device_id=DEVICE, created_at="2024-03-09T11:00:00.000Z")
    )
    await db_session.flush()
    await post_repository.increment_views(db_session, busy.id)
    await like_repository.toggle_like(db_session, busy.id, DEVICE)

    stats = await admin_service.get_stats(db_session, day)

    assert stats.overview.posts == 2
    assert stats.overview.views == 1
    assert stats.overview.likes == 1
    assert stats.overview.comments == 2

    assert stats.day.date == day
    assert stats.day.posts == 1
    assert stats.day.views == 4
    assert stats.day.comments == 1
    assert stats.day.likes == 0

    assert [(p.title, p.views) for p in stats.views_top] == [("Busy", 3), ("Calm", 1)]
    assert [c.id for c in stats.recent_comments] == ["c1"]
    assert stats.recent_comments[0].post_title == "Busy"


@pytest.mark.unit
@pytest.mark.anyio
async def test_admin_comment_listing_shape(db_session: AsyncSession):
    post = await create_post(db_session, title="Hello")
    db_session.add(
        Comment(id="c1", post_id=post.id, content="first!", floor=1, device_id=DEVICE, created_at="2024-01-01T00:00:00.000Z")
    )
    await db_session.flush()

    listing = await admin_service.list_comments(db_session, page=0, page_size=999)

    assert listing.page == 1
    assert listing.page_size == 50
    assert listing.total == 1
    dumped = listing.comments[0].model_dump(by_alias=True)
    assert dumped["postTitle"] == "Hello"
    assert dumped["deviceId"] == DEVICE
