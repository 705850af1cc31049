# adoptme/api/mocks/services.py
import logging
from typing import Any, Dict, List

from faker import Faker

from adoptme.core.security import hash_password, normalize_email
from adoptme.models.pet import Pet
from adoptme.models.user import User
from adoptme.repositories.pets import PetRepository
from adoptme.repositories.users import UserRepository

MOCK_PASSWORD = "coder123"
SPECIES = ["Perro", "Gato", "Conejo", "Hámster", "Loro", "Tortuga"]
ROLES = ["user", "admin"]


class MockService:
    """
    개발/테스트용 mock 데이터를 생성하는 서비스.

    - generate_*: id가 발급된 엔티티를 만들기만 하고 저장하지는 않습니다.
    - generate_data: 생성한 사용자/반려동물을 저장소에 일괄 저장합니다.
    mock 사용자의 비밀번호는 모두 'coder123'의 해시입니다.
    """
    def __init__(self, user_repository: UserRepository, pet_repository: PetRepository, locale: str = 'es_ES'):
        self.users = user_repository
        self.pets = pet_repository
        self.faker = Faker(locale)

    def _pet_data(self) -> Dict[str, Any]:
        return {
            'name': self.faker.first_name(),
            'specie': self.faker.random_element(SPECIES),
            'birth_date': self.faker.date_of_birth(minimum_age=0, maximum_age=15),
            'adopted': False,
            'owner': None,
        }

    def _user_data(self, password_hash: str) -> Dict[str, Any]:
        return {
            'first_name': self.faker.first_name(),
            'last_name': self.faker.last_name(),
            'email': normalize_email(self.faker.unique.email()),
            'password': password_hash,
            'role': self.faker.random_element(ROLES),
            'pets': [],
        }

    def generate_pets(self, count: int) -> List[Pet]:
        return [self.pets.new_entity(self._pet_data()) for _ in range(count)]

    def generate_users(self, count: int) -> List[User]:
        # scrypt는 느리므로 요청마다 한 번만 해시합니다.
        password_hash = hash_password(MOCK_PASSWORD)
        return [self.users.new_entity(self._user_data(password_hash)) for _ in range(count)]

    def generate_data(self, users: int, pets: int) -> Dict[str, List[str]]:
        """mock 사용자/반려동물을 생성해 저장하고, 저장된 id 목록을 반환합니다."""
        password_hash = hash_password(MOCK_PASSWORD) if users else None
        user_ids = []
        for _ in range(users):
            user_data = self._user_data(password_hash)
            # 이미 가입된 이메일과 겹치면 새로 뽑습니다.
            while self.users.find_by_email(user_data['email']):
                user_data['email'] = normalize_email(self.faker.unique.email())
            user_ids.append(self.users.insert(user_data).user_id)

        pet_ids = [self.pets.insert(self._pet_data()).pet_id for _ in range(pets)]

        logging.info(f"Mock data generated: {len(user_ids)} users, {len(pet_ids)} pets")
        return {'users': user_ids, 'pets': pet_ids}
