# adoptme/api/sessions/services.py
import logging
from typing import Dict, Any

from adoptme.core.exceptions import InvalidCredentials, UserAlreadyExists
from adoptme.core.security import hash_password, normalize_email, verify_password
from adoptme.models.user import User
from adoptme.repositories.users import UserRepository


class SessionService:
    def __init__(self, user_repository: UserRepository):
        self.users = user_repository

    def register(self, user_data: Dict[str, Any]) -> User:
        """이메일 중복을 확인한 뒤 비밀번호를 해시하여 사용자를 생성합니다."""
        email = normalize_email(user_data['email'])
        if self.users.find_by_email(email):
            raise UserAlreadyExists()

        new_user = self.users.insert(dict(
            user_data,
            email=email,
            password=hash_password(user_data['password']),
            pets=[],
        ))
        logging.info(f"User registered: {new_user.user_id}")
        return new_user

    def login(self, email: str, password: str) -> User:
        user = self.users.find_by_email(normalize_email(email))
        # 존재하지 않는 이메일과 틀린 비밀번호를 구분하지 않습니다.
        if not user or not verify_password(user.password, password):
            logging.warning(f"Failed login attempt for {email}")
            raise InvalidCredentials()
        return user
