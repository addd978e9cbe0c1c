from passlib.context import CryptContext
from fastapi import HTTPException

# bcrypt silently ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def _too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES

def hash_password(password: str) -> str:
    if _too_long(password):
        raise HTTPException(status_code=400, detail=f"Password too long (bcrypt max {BCRYPT_MAX_BYTES} bytes)")
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    # nothing longer than the limit can have been hashed
    if _too_long(plain_password):
        return False
    return pwd_context.verify(plain_password, hashed_password)
