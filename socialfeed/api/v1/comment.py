"""
评论模块路由
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.api.deps import get_current_user, get_db_session
from socialfeed.models import (
    CommentCreate, CommentListResponse, CommentResponse, CommentUpdate, MessageResponse
)
from socialfeed.services.comment_service import comment_service
from socialfeed.utils.pagination import normalize_page

router = APIRouter()


@router.post("/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    data: CommentCreate,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    发表评论

    - 需要登录
    - 评论内容 1-1000 字符
    - 支持回复（仅一层）
    """
    return await comment_service.create_comment(
        session,
        current_user["user_id"],
        data.target_type,
        data.target_id,
        data.content,
        data.parent_comment_id,
    )


@router.get("/comments/{target_type}/{target_id}", response_model=CommentListResponse)
async def get_comments(
    target_type: str,
    target_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    parent_id: Optional[str] = Query(None, alias="parentId"),
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    获取评论列表

    - 不传 parentId 返回顶级评论，传入则返回该评论的回复
    """
    page_num, limit_num = normalize_page(page, limit)
    return await comment_service.get_comments(
        session, current_user["user_id"], target_type, target_id, page_num, limit_num, parent_id
    )


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    comment_id: str,
    data: CommentUpdate,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """修改评论（仅作者）"""
    return await comment_service.edit_comment(
        session, current_user["user_id"], comment_id, data.content
    )


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: str,
    current_user: dict = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    删除评论

    - 仅评论作者可删除
    - 软删除，不再计入评论数
    """
    await comment_service.delete_comment(session, current_user["user_id"], comment_id)
    return MessageResponse(message="Comment deleted")
