# adoptme/core/exceptions.py
"""
도메인 예외 정의.

각 예외는 HTTP 상태 코드와 error_code를 함께 가지고 있어
블루프린트와 전역 에러 핸들러가 동일한 방식으로 응답을 만들 수 있습니다.
필드 누락 등 입력 검증 실패는 marshmallow.ValidationError를 그대로 사용합니다.
"""


class AdoptmeError(Exception):
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str = None):
        self.message = message or self.__class__.__doc__ or self.error_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """API 에러 응답 본문"""
        return {"status": "error", "error_code": self.error_code, "message": self.message}


class NotFoundError(AdoptmeError):
    """Record not found"""
    status_code = 404
    error_code = "NOT_FOUND"


class UserNotFound(NotFoundError):
    """User not found"""
    error_code = "USER_NOT_FOUND"


class PetNotFound(NotFoundError):
    """Pet not found"""
    error_code = "PET_NOT_FOUND"


class AdoptionNotFound(NotFoundError):
    """Adoption not found"""
    error_code = "ADOPTION_NOT_FOUND"


class AlreadyAdopted(AdoptmeError):
    """Pet is already adopted"""
    status_code = 400
    error_code = "PET_ALREADY_ADOPTED"


class UserAlreadyExists(AdoptmeError):
    """User already exists"""
    status_code = 400
    error_code = "USER_ALREADY_EXISTS"


class InvalidCredentials(AdoptmeError):
    """Incorrect email or password"""
    status_code = 400
    error_code = "INVALID_CREDENTIALS"


class UserHasPets(AdoptmeError):
    """User still owns adopted pets"""
    status_code = 400
    error_code = "USER_HAS_PETS"


class StoreError(AdoptmeError):
    """Record store is unavailable, please retry"""
    status_code = 500
    error_code = "STORE_ERROR"
