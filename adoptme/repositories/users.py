# adoptme/repositories/users.py
from typing import Optional

from adoptme.core.security import normalize_email
from adoptme.models.user import User
from adoptme.repositories.base import FirestoreRepository, store_errors


class UserRepository(FirestoreRepository):
    """'users' 컬렉션 접근 계층."""
    collection_name = 'users'
    model = User
    id_field = 'user_id'

    def find_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        with store_errors("users.find_by_email"):
            query = self.collection_ref.where('email', '==', normalize_email(email)).limit(1).stream()
            user_doc = next(query, None)
        return self._to_entity(user_doc) if user_doc else None
