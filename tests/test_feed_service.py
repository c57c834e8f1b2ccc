import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from socialfeed.db.dao import ContentDAO
from socialfeed.db.models import ContentStats
from socialfeed.errors import InternalError
from socialfeed.models import TargetKind
from socialfeed.services.feed_service import FeedService, fetch_limit
from socialfeed.services.interaction_service import interaction_service


@pytest.fixture
async def interleaved(make_user, make_article, make_media):
    """a0 m1 a2 m3 a4 m5（分钟）"""
    user = await make_user()
    items = []
    for minute in range(6):
        if minute % 2 == 0:
            items.append(await make_article(user, minutes=minute, title=f"a{minute}"))
        else:
            items.append(await make_media(user, minutes=minute, title=f"m{minute}"))
    return user, [item.id for item in reversed(items)]


def test_fetch_limit_rounds_up():
    assert fetch_limit(1, 20, 0.5) == 10
    assert fetch_limit(1, 3, 0.5) == 2
    assert fetch_limit(3, 7, 0.25) == 6
    assert fetch_limit(1, 20, 0.0) == 0


@pytest.mark.parametrize("page", [1, 2, 3, 4])
async def test_page_is_slice_of_merged_sequence(session_factory, interleaved, page):
    user, newest_first = interleaved

    result = await FeedService.get_social_feed(session_factory, user.id, page=page, limit=2)

    assert [item.id for item in result.feed] == newest_first[2 * (page - 1):2 * page]
    assert result.pagination.total == 6
    assert result.pagination.pages == 3
    assert result.pagination.has_more is (page < 3)


async def test_page_beyond_end_is_empty(session_factory, interleaved):
    user, _ = interleaved

    result = await FeedService.get_social_feed(session_factory, user.id, page=50, limit=20)

    assert result.feed == []
    assert result.stats.articles == 0
    assert result.stats.medias == 0


async def test_huge_page_skips_item_queries(session_factory, interleaved, monkeypatch):
    user, _ = interleaved

    async def unexpected(*args, **kwargs):
        raise AssertionError("items should not be queried past the end")

    monkeypatch.setattr(ContentDAO, "find_visible", unexpected)

    result = await FeedService.get_social_feed(session_factory, user.id, page=10 ** 20, limit=20)

    assert result.feed == []
    assert result.pagination.page == 10 ** 20
    assert result.pagination.total == 6
    assert result.pagination.pages == 1
    assert result.pagination.has_more is False


async def test_empty_store_skips_item_queries(session_factory, make_user, monkeypatch):
    user = await make_user()

    async def unexpected(*args, **kwargs):
        raise AssertionError("items should not be queried for an empty feed")

    monkeypatch.setattr(ContentDAO, "find_visible", unexpected)

    feed = await FeedService.build_feed(session_factory, user.id, page=1, limit=20)

    assert feed.items == []
    assert feed.total == 0
    assert feed.fetched == {TargetKind.ARTICLE: 0, TargetKind.MEDIA: 0}


async def test_fetch_bound_capped_at_kind_total(session_factory, interleaved, monkeypatch):
    user, _ = interleaved
    original = ContentDAO.find_visible
    bounds = {}

    async def recording_find(session, kind, search=None, limit=20, offset=0):
        bounds[kind] = limit
        return await original(session, kind, search, limit=limit, offset=offset)

    monkeypatch.setattr(ContentDAO, "find_visible", recording_find)

    feed = await FeedService.build_feed(
        session_factory, user.id, page=2, limit=5,
        split_ratio={"article": 100.0, "media": 0.5}
    )

    # 文章 ceil(2 * 5 * 100) 条截断为总数 3；媒体 ceil(2 * 5 * 0.5) = 5 也截断为 3
    assert bounds == {TargetKind.ARTICLE: 3, TargetKind.MEDIA: 3}
    assert feed.totals == {TargetKind.ARTICLE: 3, TargetKind.MEDIA: 3}
    assert len(feed.items) == 1


async def test_hidden_content_never_appears(session_factory, make_user, make_article, make_media):
    user = await make_user()
    visible = await make_article(user, minutes=1, title="launch notes")
    await make_article(user, minutes=2, title="launch draft", published=False)
    await make_media(user, minutes=3, title="launch video", is_public=False)

    for search in (None, "launch", "draft", "video"):
        result = await FeedService.get_unified_feed(
            session_factory, user.id, page=1, limit=20, search=search
        )
        ids = [item.id for item in result.articles + result.medias]
        assert set(ids) <= {visible.id}

    result = await FeedService.get_social_feed(session_factory, user.id)
    assert [item.id for item in result.feed] == [visible.id]
    assert result.pagination.total == 1


async def test_search_matches_title_body_and_tags(
    session_factory, make_user, make_article, make_media
):
    user = await make_user()
    by_title = await make_article(user, minutes=1, title="Quarterly Results")
    by_body = await make_article(user, minutes=2, content="<p>the quarterly plan</p>")
    by_tag = await make_media(user, minutes=3, tags=["quarterly"])
    await make_media(user, minutes=4, title="unrelated")

    result = await FeedService.get_unified_feed(
        session_factory, user.id, page=1, limit=20, search="QUARTERLY"
    )

    assert {item.id for item in result.articles} == {by_title.id, by_body.id}
    assert [item.id for item in result.medias] == [by_tag.id]
    assert result.stats.total_articles == 2
    assert result.stats.total_medias == 1
    assert result.blogs == []


async def test_search_treats_wildcards_literally(session_factory, make_user, make_article):
    user = await make_user()
    await make_article(user, minutes=1, title="plain title")
    percent = await make_article(user, minutes=2, title="100% done")

    result = await FeedService.get_unified_feed(
        session_factory, user.id, page=1, limit=20, search="%"
    )

    assert [item.id for item in result.articles] == [percent.id]


async def test_search_matches_non_ascii_tag(session_factory, make_user, make_article):
    user = await make_user()
    tagged = await make_article(user, minutes=1, tags=["été"])
    await make_article(user, minutes=2, tags=["winter"])

    result = await FeedService.get_unified_feed(
        session_factory, user.id, page=1, limit=20, search="été"
    )

    assert [item.id for item in result.articles] == [tagged.id]
    assert result.stats.total_articles == 1


async def test_search_does_not_match_tag_list_syntax(
    session_factory, make_user, make_article, make_media
):
    user = await make_user()
    await make_article(user, minutes=1, tags=["a", "b"])
    await make_media(user, minutes=2, tags=["a", "b"])

    for search in ('", "', '["a"', "[]"):
        result = await FeedService.get_unified_feed(
            session_factory, user.id, page=1, limit=20, search=search
        )
        assert result.articles == []
        assert result.medias == []
        assert result.pagination.total == 0


async def test_sparse_kind_under_fills_page(session_factory, make_user, make_article):
    user = await make_user()
    for minute in range(4):
        await make_article(user, minutes=minute)

    result = await FeedService.get_social_feed(session_factory, user.id, page=1, limit=4)

    # 文章只取 ceil(4 * 0.5) = 2 条，不从媒体的配额中补齐
    assert len(result.feed) == 2
    assert result.pagination.total == 4


async def test_split_ratio_override(session_factory, make_user, make_article):
    user = await make_user()
    for minute in range(4):
        await make_article(user, minutes=minute)

    feed = await FeedService.build_feed(
        session_factory, user.id, page=1, limit=4,
        split_ratio={"article": 1.0, "media": 0.0}
    )

    assert len(feed.items) == 4
    assert feed.fetched[TargetKind.MEDIA] == 0


async def test_include_flags_exclude_kinds(session_factory, interleaved):
    user, _ = interleaved

    result = await FeedService.get_unified_feed(
        session_factory, user.id, page=1, limit=20, include_media=False
    )

    assert result.medias == []
    assert len(result.articles) == 3
    assert result.stats.total_medias == 0
    assert result.pagination.total == 3


async def test_items_carry_counts_and_viewer_like_state(
    session_factory, session, make_user, make_article
):
    author = await make_user()
    viewer = await make_user()
    article = await make_article(author)
    await interaction_service.toggle_like(session, viewer.id, "article", article.id)

    mine = await FeedService.get_social_feed(session_factory, viewer.id)
    theirs = await FeedService.get_social_feed(session_factory, author.id)
    public = await FeedService.get_public_feed(session_factory)

    assert mine.feed[0].likes_count == 1
    assert mine.feed[0].is_liked is True
    assert theirs.feed[0].likes_count == 1
    assert theirs.feed[0].is_liked is False
    assert public.feed[0].is_liked is False


async def test_item_payloads(session_factory, make_user, make_article, make_media):
    user = await make_user(name="Writer")
    await make_article(user, minutes=1, content="<p>" + "a" * 500 + "</p>", tags=["news"])
    await make_media(user, minutes=2)

    result = await FeedService.get_social_feed(session_factory, user.id)
    media_item, article_item = result.feed

    assert article_item.feed_type == "article"
    assert article_item.content == "a" * 200
    assert article_item.tags == ["news"]
    assert article_item.author.name == "Writer"
    assert media_item.feed_type == "media"
    assert media_item.url == "/uploads/file.png"
    assert media_item.media_type == "image"
    assert media_item.summary is None


async def test_missing_author_is_null(session_factory, make_user, make_article):
    viewer = await make_user()
    await make_article(None)

    result = await FeedService.get_social_feed(session_factory, viewer.id)

    assert result.feed[0].author is None


async def test_feed_does_not_write_counter_cache(session_factory, interleaved):
    user, _ = interleaved

    await FeedService.get_social_feed(session_factory, user.id)

    async with session_factory() as s:
        rows = await s.execute(select(func.count()).select_from(ContentStats))
        assert rows.scalar() == 0


async def test_kind_failure_fails_whole_feed(session_factory, interleaved, monkeypatch):
    user, _ = interleaved
    original = ContentDAO.count_visible

    async def flaky_count(session, kind, search=None):
        if kind == TargetKind.MEDIA:
            raise OperationalError("count", {}, Exception("connection lost"))
        return await original(session, kind, search)

    monkeypatch.setattr(ContentDAO, "count_visible", flaky_count)

    with pytest.raises(InternalError):
        await FeedService.get_social_feed(session_factory, user.id)
