"""
统一响应模型
"""

from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """对外 JSON 字段使用 camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PaginationMeta(CamelModel):
    """分页元数据"""
    page: int = Field(..., description="当前页码")
    limit: int = Field(..., description="每页数量")
    total: int = Field(..., description="总数")
    pages: int = Field(..., description="总页数")
    has_more: Optional[bool] = Field(None, description="是否还有下一页")


class MessageResponse(CamelModel):
    """仅包含提示信息的响应"""
    message: str


class ErrorResponse(BaseModel):
    """错误响应"""
    error: str = Field(..., description="错误信息")

    class Config:
        json_schema_extra = {
            "example": {"error": "Content not found"}
        }
