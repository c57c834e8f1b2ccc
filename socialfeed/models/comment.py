"""
评论相关数据模型
"""

from typing import Optional, List
from pydantic import Field
from datetime import datetime

from .response import CamelModel, PaginationMeta
from .user import UserBrief


class CommentCreate(CamelModel):
    """创建评论请求（字段校验在服务层完成，以返回统一的错误格式）"""
    content: Optional[str] = None
    target_type: Optional[str] = None
    target_id: Optional[str] = None
    parent_comment_id: Optional[str] = None


class CommentUpdate(CamelModel):
    """修改评论请求"""
    content: Optional[str] = None


class CommentResponse(CamelModel):
    """评论响应"""
    id: str
    content: str
    target_type: str
    target_id: str
    parent_comment_id: Optional[str] = None
    author: Optional[UserBrief] = None
    likes_count: int = Field(0, description="点赞数")
    replies_count: int = Field(0, description="回复数")
    is_liked: bool = Field(False, description="当前用户是否已点赞")
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class CommentListResponse(CamelModel):
    comments: List[CommentResponse]
    total_comments: int
    pagination: PaginationMeta
