from passlib.context import CryptContext

# pbkdf2_sha256: 외부 bcrypt 바이너리 없이 동작
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    # 형식이 잘못된 해시(평문 등)는 예외 대신 불일치로 처리
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False
