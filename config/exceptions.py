"""
Custom exceptions for OfficeDesk.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BusinessError(APIException):
    """Base business error exception."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_code = 'business_error'
    default_detail = '业务逻辑错误'

    def __init__(self, detail=None, code=None, status_code=None):
        # Registered business codes supply the default message and HTTP status
        if code in ERROR_CODES:
            message, code_status = ERROR_CODES[code]
            detail = detail or message
            status_code = status_code or code_status
        if status_code:
            self.status_code = status_code
        super().__init__(detail, code)


class ValidationError(BusinessError):
    """Missing or malformed request field."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'validation_error'
    default_detail = '数据验证失败'


class PermissionDenied(BusinessError):
    """Role is categorically excluded from the operation."""
    status_code = status.HTTP_403_FORBIDDEN
    default_code = 'permission_denied'
    default_detail = '权限不足'


class NoPermission(BusinessError):
    """Authenticated, but not related to the requested row."""
    status_code = status.HTTP_403_FORBIDDEN
    default_code = 'no_permission'
    default_detail = '无权限操作该数据'


class ResourceNotFound(BusinessError):
    """Resource not found error."""
    status_code = status.HTTP_404_NOT_FOUND
    default_code = 'resource_not_found'
    default_detail = '资源不存在'


# Error codes mapping
ERROR_CODES = {
    # Authentication errors (1000-1099)
    1001: ('用户名或密码错误', status.HTTP_400_BAD_REQUEST),
    1003: ('刷新令牌无效或已过期', status.HTTP_400_BAD_REQUEST),
    1004: ('用户未激活', status.HTTP_400_BAD_REQUEST),
    1010: ('仅系统管理员和公司管理者可以执行该操作', status.HTTP_403_FORBIDDEN),

    # Work task errors (3000-3099)
    3001: ('工作项不存在', status.HTTP_404_NOT_FOUND),
    3002: ('无权限访问该工作项', status.HTTP_403_FORBIDDEN),
    3003: ('回复不存在', status.HTTP_404_NOT_FOUND),
    3004: ('无权限删除该回复', status.HTTP_403_FORBIDDEN),

    # Schedule errors (3100-3199)
    3101: ('日程不存在', status.HTTP_404_NOT_FOUND),
    3102: ('无权限访问该日程', status.HTTP_403_FORBIDDEN),
    3103: ('日程回复不允许删除', status.HTTP_403_FORBIDDEN),

    # User errors (4000-4099)
    4001: ('关联用户不存在', status.HTTP_400_BAD_REQUEST),

    # Notification errors (7000-7099)
    7001: ('通知不存在', status.HTTP_404_NOT_FOUND),
}


def get_error_message(error_code, extra_message=None):
    """Get the standard message for a business error code."""
    message, _ = ERROR_CODES.get(error_code, ('未知错误', status.HTTP_500_INTERNAL_SERVER_ERROR))
    if extra_message:
        message = f"{message}: {extra_message}"
    return message


def api_exception_handler(exc, context):
    """
    Render every API error as {code, message, errors}.

    `code` is the numeric business code when the raise supplied one,
    otherwise the HTTP status.
    """
    response = exception_handler(exc, context)
    if response is None:
        view = context.get('view')
        logger.error('未处理的异常 - 视图: %s', view.__class__.__name__ if view else '-', exc_info=exc)
        return None

    codes = exc.get_codes() if isinstance(exc, APIException) else None
    error_code = codes if isinstance(codes, int) else response.status_code

    detail = getattr(exc, 'detail', None)
    if isinstance(detail, (dict, list)):
        message = ValidationError.default_detail
        errors = response.data if isinstance(response.data, dict) else {'non_field_errors': response.data}
    else:
        message = str(detail) if detail is not None else get_error_message(error_code)
        errors = {}

    response.data = {
        'code': error_code,
        'message': message,
        'errors': errors,
    }
    return response
