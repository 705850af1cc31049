from werkzeug.security import generate_password_hash, check_password_hash

HASH_METHOD = "scrypt"

def hash_password(password: str) -> str:
    return generate_password_hash(password, method=HASH_METHOD)

def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)

def session_claims(user) -> dict:
    """세션 쿠키(JWT)에 담을 사용자 정보. 비밀번호 해시는 절대 포함하지 않습니다."""
    return {
        "name": f"{user.first_name} {user.last_name}",
        "email": user.email,
        "role": user.role,
    }

def normalize_email(email: str) -> str:
    """이메일은 대소문자를 구분하지 않고 소문자로 저장/조회합니다."""
    return email.strip().lower() if email else email
