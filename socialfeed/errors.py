"""
业务异常

服务层抛出，由 app.py 中注册的异常处理器统一转换为 {"error": message}
"""

from typing import Optional


class ServiceError(Exception):
    """业务异常基类"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """输入缺失或格式错误"""
    status_code = 400
    default_message = "Invalid request"


class InvalidTarget(ValidationError):
    """不支持的目标类型"""
    default_message = "Invalid targetType"


class NotFound(ServiceError):
    """目标内容或评论不存在"""
    status_code = 404
    default_message = "Content not found"


class Forbidden(ServiceError):
    """无权操作"""
    status_code = 403
    default_message = "Permission denied"


class InternalError(ServiceError):
    """存储失败等内部错误"""
    status_code = 500
