import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from dependencies.security import get_current_user, login_session, logout_session
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.users import LoginRequest, User, UserCreate, public_user
from services.storage.base import Storage
from utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(tags=["인증"])


# ✅ [REGISTER] 회원가입 후 바로 로그인 상태
@router.post("/register", response_model=User, status_code=201)
def register(payload: UserCreate, request: Request, storage: Storage = Depends(get_storage)):
    # 관리자 계정은 공개 가입으로 만들 수 없음
    if payload.role == UserRole.ADMIN.value:
        raise HTTPException(status_code=403, detail="Access denied. Admin accounts cannot be self-registered")
    if storage.get_user_by_username(payload.username) is not None:
        raise HTTPException(status_code=400, detail="Username already exists")

    data = payload.model_dump()
    data["password"] = hash_password(payload.password)
    user = storage.create_user(data)
    login_session(request, user.id)
    logger.info("Registered user %s (%s)", user.username, user.role)
    return public_user(user)


# ✅ [LOGIN] 로그인
@router.post("/login", response_model=User)
def login(payload: LoginRequest, request: Request, storage: Storage = Depends(get_storage)):
    user = storage.get_user_by_username(payload.username)
    if user is None or not verify_password(payload.password, user.password):
        raise HTTPException(status_code=401, detail="Incorrect username or password")
    login_session(request, user.id)
    return public_user(user)


# ✅ [LOGOUT] 로그아웃 (세션이 없어도 성공)
@router.post("/logout")
def logout(request: Request):
    logout_session(request)
    return {"message": "Logged out"}


# ✅ [READ] 현재 로그인 사용자
@router.get("/user", response_model=User)
def current_user(user: User = Depends(get_current_user)):
    return user
