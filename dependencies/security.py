"""
dependencies/security.py

세션 쿠키 기반 인증/인가 의존성.
- 로그인 시 request.session["user_id"] 저장 (SessionMiddleware 가 서명 쿠키로 보관)
- get_current_user: 현재 사용자 컨텍스트(User) 반환, 없으면 401
- require_roles: 역할 검사, 불일치 시 403
- 학생 본인 소유 기록 검사 헬퍼
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request

from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.users import User, public_user
from services.storage.base import Storage

SESSION_USER_KEY = "user_id"
STAFF_ROLES = (UserRole.ADMIN.value, UserRole.TEACHER.value)


def login_session(request: Request, user_id: int) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user_id


def logout_session(request: Request) -> None:
    request.session.clear()


def get_optional_user(request: Request, storage: Storage = Depends(get_storage)) -> Optional[User]:
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None
    record = storage.get_user(user_id)
    if record is None:
        # 삭제된 계정의 세션
        request.session.clear()
        return None
    return public_user(record)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_roles(*roles: str):
    """
    사용 예:
        @router.post("/faculties")
        def create_faculty(..., user: User = Depends(require_roles("admin"))):
    """
    allowed = {getattr(r, "value", r) for r in roles}

    def _checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(status_code=403, detail="Access denied. Insufficient permissions")
        return user

    return _checker


def is_staff(user: User) -> bool:
    return user.role in STAFF_ROLES


def ensure_student_access(user: User, student_id: Optional[int]) -> None:
    """관리자/교사는 통과, 학생은 본인 기록만"""
    if is_staff(user):
        return
    if user.student_id is None or student_id != user.student_id:
        raise HTTPException(status_code=403, detail="Access denied")


def ensure_self(user: User, user_id: int) -> None:
    if user.id != user_id:
        raise HTTPException(status_code=403, detail="Access denied")
