from fastapi import Depends

from app.api.deps import get_session_context
from app.core.error_codes import ErrorCode
from app.core.errors import PermissionDeniedError
from app.core.session_context import SessionContext


def require_admin(context: SessionContext = Depends(get_session_context)) -> SessionContext:
    if not context.is_admin:
        raise PermissionDeniedError(code=ErrorCode.ADMIN_REQUIRED, message="Administrator access required")
    return context
