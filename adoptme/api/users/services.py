# adoptme/api/users/services.py
import logging
from typing import Dict, Any, List

from firebase_admin import firestore
from firebase_admin.firestore import Transaction

from adoptme.core.exceptions import UserAlreadyExists, UserHasPets, UserNotFound
from adoptme.core.security import normalize_email
from adoptme.models.user import User
from adoptme.repositories.base import store_errors
from adoptme.repositories.users import UserRepository


class UserService:
    """
    사용자 조회/수정/삭제를 담당하는 서비스 클래스.
    생성(회원가입)은 SessionService가 비밀번호 해싱과 함께 처리합니다.
    """
    def __init__(self, db, user_repository: UserRepository):
        self.db = db
        self.users = user_repository

    def list_users(self) -> List[User]:
        return self.users.find_all()

    def get_user(self, user_id: str) -> User:
        user = self.users.find_by_id(user_id)
        if not user:
            raise UserNotFound()
        return user

    def update_user(self, user_id: str, update_data: Dict[str, Any]) -> User:
        self.get_user(user_id)
        if not update_data:
            raise ValueError("No fields to update.")

        update_data = dict(update_data)
        if update_data.get('email'):
            update_data['email'] = normalize_email(update_data['email'])
            existing = self.users.find_by_email(update_data['email'])
            if existing and existing.user_id != user_id:
                raise UserAlreadyExists(f"Email {update_data['email']} is already registered")

        updated_user = self.users.update(user_id, update_data)
        if not updated_user:
            raise UserNotFound()
        return updated_user

    def delete_user(self, user_id: str) -> None:
        """
        [트랜잭션] 입양한 반려동물이 있는 사용자는 소유 관계가 깨지므로 삭제하지 않습니다.

        확인과 삭제를 한 트랜잭션에서 처리하므로, 그 사이에 커밋된 입양은
        충돌로 이어져 재시도 시 UserHasPets로 실패합니다.
        """
        transaction = self.db.transaction()

        @firestore.transactional
        def _delete_in_transaction(transaction: Transaction) -> None:
            user = self.users.find_by_id(user_id, transaction=transaction)
            if not user:
                raise UserNotFound()
            if user.pets:
                raise UserHasPets()
            self.users.delete_in_transaction(transaction, user_id)

        with store_errors("users.delete"):
            _delete_in_transaction(transaction)
        logging.info(f"User {user_id} deleted")
