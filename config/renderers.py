"""
Response envelope renderer for OfficeDesk.
"""
from rest_framework.renderers import JSONRenderer

SUCCESS_MESSAGES = {
    201: '创建成功',
}


def is_enveloped(data):
    """Views and the exception handler already build {code, message, ...}."""
    return isinstance(data, dict) and 'code' in data and 'message' in data


class StandardJSONRenderer(JSONRenderer):
    """
    Render every API payload as {code, message, data} on success or
    {code, message, errors} on failure.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        if not is_enveloped(data):
            response = renderer_context.get('response') if renderer_context else None
            status_code = response.status_code if response is not None else 200
            data = self.envelope(data, status_code)
        return super().render(data, accepted_media_type, renderer_context)

    def envelope(self, data, status_code):
        if status_code >= 400:
            detail = data.get('detail') if isinstance(data, dict) else None
            return {
                'code': status_code,
                'message': str(detail) if detail else '请求失败',
                'errors': data if isinstance(data, dict) else {},
            }
        return {
            'code': status_code,
            'message': SUCCESS_MESSAGES.get(status_code, 'success'),
            'data': data,
        }
