"""
数据库初始化脚本

创建所有表；可选地写入演示数据

    python -m socialfeed.db.init_db [--seed]
"""

import asyncio
import sys
from datetime import datetime, timedelta

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from socialfeed.db.base import get_database_url
from socialfeed.db.models import Article, Base, Media, User
from socialfeed.utils.id_generator import (
    generate_article_id, generate_media_id, generate_user_id
)


async def create_tables(engine):
    """创建所有表"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ All tables created")


async def seed_demo_data(engine):
    """写入一名用户、一篇文章和一个媒体，便于本地联调信息流"""
    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    now = datetime.utcnow()

    async with session_factory() as session:
        user = User(id=generate_user_id(), email="demo@example.com", name="Demo User")
        session.add(user)
        session.add(Article(
            id=generate_article_id(),
            author_id=user.id,
            title="Welcome",
            content="<p>Hello from the social feed.</p>",
            summary="First post",
            tags=["welcome"],
            published=True,
            created_at=now - timedelta(minutes=5),
        ))
        session.add(Media(
            id=generate_media_id(),
            uploaded_by=user.id,
            title="Team photo",
            description="Offsite 2024",
            filename="team.jpg",
            original_name="team.jpg",
            url="/uploads/team.jpg",
            mimetype="image/jpeg",
            size=204800,
            media_type="image",
            tags=["team"],
            is_public=True,
            created_at=now,
        ))
        await session.commit()

    logger.info("✅ Demo data inserted")


async def main(seed: bool = False):
    """主函数"""
    logger.info("🚀 Starting database initialization...")
    engine = create_async_engine(get_database_url(async_mode=True), echo=True)

    try:
        logger.info("📦 Step 1: Creating tables...")
        await create_tables(engine)

        if seed:
            logger.info("📦 Step 2: Inserting demo data...")
            await seed_demo_data(engine)

        logger.success("✅ Database initialization completed successfully!")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main(seed="--seed" in sys.argv[1:]))
