"""
测试夹具：每个测试一个临时 SQLite 数据库
"""

from datetime import datetime, timedelta
from itertools import count

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from socialfeed.api import deps
from socialfeed.app import app
from socialfeed.db.models import Article, Base, Media, User
from socialfeed.services.presence_service import PresenceStore
from socialfeed.utils.auth import create_access_token
from socialfeed.utils.id_generator import (
    generate_article_id, generate_media_id, generate_user_id
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)
_seq = count()


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(session_factory):
    async def _make_user(name=None, **fields):
        n = next(_seq)
        user = User(
            id=generate_user_id(),
            email=fields.pop("email", f"user{n}@example.com"),
            name=name if name is not None else f"User {n}",
            **fields
        )
        async with session_factory() as s:
            s.add(user)
            await s.commit()
        return user
    return _make_user


@pytest.fixture
def make_article(session_factory):
    async def _make_article(author, minutes=0, published=True, **fields):
        article = Article(
            id=generate_article_id(),
            author_id=author.id if author else "user_missing",
            title=fields.pop("title", "Article"),
            content=fields.pop("content", "<p>body</p>"),
            summary=fields.pop("summary", "summary"),
            tags=fields.pop("tags", []),
            published=published,
            created_at=BASE_TIME + timedelta(minutes=minutes),
            **fields
        )
        async with session_factory() as s:
            s.add(article)
            await s.commit()
        return article
    return _make_article


@pytest.fixture
def make_media(session_factory):
    async def _make_media(uploader, minutes=0, is_public=True, **fields):
        media = Media(
            id=generate_media_id(),
            uploaded_by=uploader.id if uploader else "user_missing",
            title=fields.pop("title", "Media"),
            description=fields.pop("description", "description"),
            tags=fields.pop("tags", []),
            filename="file.png",
            original_name="file.png",
            url="/uploads/file.png",
            mimetype="image/png",
            size=1024,
            media_type="image",
            is_public=is_public,
            created_at=BASE_TIME + timedelta(minutes=minutes),
            **fields
        )
        async with session_factory() as s:
            s.add(media)
            await s.commit()
        return media
    return _make_media


@pytest.fixture
def auth_headers():
    def _auth_headers(user) -> dict:
        token = create_access_token({"sub": user.id, "username": user.name})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def presence():
    return PresenceStore(ttl_seconds=300)


@pytest.fixture
async def client(session_factory, presence):
    async def override_db_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[deps.get_db_session] = override_db_session
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.state.presence = presence

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
