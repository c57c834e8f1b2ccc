import pytest

from socialfeed.errors import Forbidden, InvalidTarget, NotFound, ValidationError
from socialfeed.models import TargetKind, TargetRef
from socialfeed.services.comment_service import comment_service
from socialfeed.services.counter_cache import CounterCache


async def test_reply_increments_parent_and_target_counts(
    session_factory, session, make_user, make_article
):
    author = await make_user()
    replier = await make_user()
    article = await make_article(author)

    parent = await comment_service.create_comment(
        session, author.id, "article", article.id, "first!"
    )
    reply = await comment_service.create_comment(
        session, replier.id, "article", article.id, "welcome", parent.id
    )

    assert reply.parent_comment_id == parent.id

    async with session_factory() as s:
        top_level = await comment_service.get_comments(s, author.id, "article", article.id)
        stats = await CounterCache.read(s, TargetRef(TargetKind.ARTICLE, article.id))

    assert top_level.comments[0].replies_count == 1
    assert stats.comments_count == 2


async def test_create_comment_populates_author(session, make_user, make_media):
    user = await make_user(name="Ana")
    media = await make_media(user)

    comment = await comment_service.create_comment(session, user.id, "media", media.id, "nice")

    assert comment.author.name == "Ana"
    assert comment.target_type == "media"
    assert comment.is_edited is False


@pytest.mark.parametrize("content", ["", "   ", None, "x" * 1001])
async def test_create_comment_rejects_bad_content(session, make_user, make_article, content):
    user = await make_user()
    article = await make_article(user)

    with pytest.raises(ValidationError):
        await comment_service.create_comment(session, user.id, "article", article.id, content)


async def test_create_comment_accepts_max_length(session, make_user, make_article):
    user = await make_user()
    article = await make_article(user)

    comment = await comment_service.create_comment(
        session, user.id, "article", article.id, "x" * 1000
    )
    assert len(comment.content) == 1000


async def test_comment_cannot_target_comment(session, make_user):
    user = await make_user()

    with pytest.raises(InvalidTarget):
        await comment_service.create_comment(session, user.id, "comment", "c1", "hi")


async def test_comment_on_missing_target(session, make_user):
    user = await make_user()

    with pytest.raises(NotFound):
        await comment_service.create_comment(session, user.id, "article", "article_missing", "hi")


async def test_reply_to_missing_parent(session, make_user, make_article):
    user = await make_user()
    article = await make_article(user)

    with pytest.raises(NotFound):
        await comment_service.create_comment(
            session, user.id, "article", article.id, "hi", "comment_missing"
        )


async def test_reply_to_deleted_parent(session, make_user, make_article):
    user = await make_user()
    article = await make_article(user)
    parent = await comment_service.create_comment(session, user.id, "article", article.id, "a")
    await comment_service.delete_comment(session, user.id, parent.id)

    with pytest.raises(NotFound):
        await comment_service.create_comment(
            session, user.id, "article", article.id, "b", parent.id
        )


async def test_reply_must_stay_on_same_target(session, make_user, make_article):
    user = await make_user()
    first = await make_article(user)
    second = await make_article(user)
    parent = await comment_service.create_comment(session, user.id, "article", first.id, "a")

    with pytest.raises(ValidationError):
        await comment_service.create_comment(
            session, user.id, "article", second.id, "b", parent.id
        )


async def test_reply_to_reply_is_rejected(session, make_user, make_article):
    user = await make_user()
    article = await make_article(user)
    parent = await comment_service.create_comment(session, user.id, "article", article.id, "a")
    reply = await comment_service.create_comment(
        session, user.id, "article", article.id, "b", parent.id
    )

    with pytest.raises(ValidationError):
        await comment_service.create_comment(
            session, user.id, "article", article.id, "c", reply.id
        )


async def test_deleted_comment_is_excluded_everywhere(
    session_factory, session, make_user, make_article
):
    user = await make_user()
    article = await make_article(user)
    keep = await comment_service.create_comment(session, user.id, "article", article.id, "keep")
    gone = await comment_service.create_comment(session, user.id, "article", article.id, "gone")

    await comment_service.delete_comment(session, user.id, gone.id)

    async with session_factory() as s:
        listing = await comment_service.get_comments(s, user.id, "article", article.id)
        stats = await CounterCache.read(s, TargetRef(TargetKind.ARTICLE, article.id))

    assert [c.id for c in listing.comments] == [keep.id]
    assert listing.total_comments == 1
    assert stats.comments_count == 1


async def test_delete_twice_is_not_found(session, make_user, make_article):
    user = await make_user()
    article = await make_article(user)
    comment = await comment_service.create_comment(session, user.id, "article", article.id, "a")
    await comment_service.delete_comment(session, user.id, comment.id)

    with pytest.raises(NotFound):
        await comment_service.delete_comment(session, user.id, comment.id)


async def test_only_author_can_delete_or_edit(session, make_user, make_article):
    owner = await make_user()
    stranger = await make_user()
    article = await make_article(owner)
    comment = await comment_service.create_comment(session, owner.id, "article", article.id, "a")

    with pytest.raises(Forbidden):
        await comment_service.delete_comment(session, stranger.id, comment.id)
    with pytest.raises(Forbidden):
        await comment_service.edit_comment(session, stranger.id, comment.id, "b")


async def test_edit_comment_marks_edited(session, make_user, make_article):
    user = await make_user()
    article = await make_article(user)
    comment = await comment_service.create_comment(session, user.id, "article", article.id, "a")

    edited = await comment_service.edit_comment(session, user.id, comment.id, "b")

    assert edited.content == "b"
    assert edited.is_edited is True
    assert edited.edited_at is not None


async def test_replies_listing_and_pagination(session, make_user, make_article):
    user = await make_user()
    article = await make_article(user)
    parent = await comment_service.create_comment(session, user.id, "article", article.id, "p")
    for i in range(3):
        await comment_service.create_comment(
            session, user.id, "article", article.id, f"r{i}", parent.id
        )

    replies = await comment_service.get_comments(
        session, user.id, "article", article.id, page=2, limit=2, parent_id=parent.id
    )
    top_level = await comment_service.get_comments(
        session, user.id, "article", article.id, parent_id="null"
    )

    assert len(replies.comments) == 1
    assert replies.total_comments == 3
    assert replies.pagination.pages == 2
    assert [c.id for c in top_level.comments] == [parent.id]
