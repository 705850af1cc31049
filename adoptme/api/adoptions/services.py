# adoptme/api/adoptions/services.py
import logging
from datetime import datetime
from typing import List, Optional

from firebase_admin import firestore
from firebase_admin.firestore import Transaction

from adoptme.core.exceptions import AdoptionNotFound, AlreadyAdopted, PetNotFound, UserNotFound
from adoptme.models.adoption import Adoption
from adoptme.repositories.adoptions import AdoptionRepository
from adoptme.repositories.base import store_errors
from adoptme.repositories.pets import PetRepository
from adoptme.repositories.users import UserRepository
from adoptme.utils.datetime_utils import DateTimeUtils


class AdoptionService:
    """
    입양 처리를 전담하는 서비스.

    사용자/반려동물 조회, 입양 여부 확인, 두 문서 수정, 입양 기록 생성을
    하나의 Firestore 트랜잭션으로 묶어 전부 반영되거나 전혀 반영되지 않도록 합니다.
    """
    def __init__(self,
                 db,
                 user_repository: UserRepository,
                 pet_repository: PetRepository,
                 adoption_repository: AdoptionRepository):
        self.db = db
        self.users = user_repository
        self.pets = pet_repository
        self.adoptions = adoption_repository
        logging.info("AdoptionService initialized with dependencies.")

    def list_adoptions(self) -> List[Adoption]:
        return self.adoptions.find_all()

    def get_adoption(self, adoption_id: str) -> Adoption:
        adoption = self.adoptions.find_by_id(adoption_id)
        if not adoption:
            raise AdoptionNotFound()
        return adoption

    def adopt(self, user_id: str, pet_id: str, adoption_date: Optional[datetime] = None) -> Adoption:
        """
        [트랜잭션] 사용자가 반려동물을 입양합니다.

        Firestore 트랜잭션은 모든 읽기가 쓰기보다 먼저 와야 하므로
        검증(사용자/반려동물 존재, 입양 여부)은 항상 수정보다 먼저 끝납니다.
        같은 반려동물에 대한 동시 요청은 트랜잭션 충돌로 재시도되고,
        재시도 시 adopted=True를 읽어 AlreadyAdopted로 실패합니다.

        :raises UserNotFound: user_id에 해당하는 사용자가 없는 경우
        :raises PetNotFound: pet_id에 해당하는 반려동물이 없는 경우
        :raises AlreadyAdopted: 이미 입양된 반려동물인 경우 (아무것도 수정하지 않음)
        :raises StoreError: 저장소 타임아웃/연결 오류/트랜잭션 중단
        """
        adoption_date = adoption_date or DateTimeUtils.now()
        transaction = self.db.transaction()

        @firestore.transactional
        def _adopt_in_transaction(transaction: Transaction) -> Adoption:
            # 1~3. 검증 (읽기만 수행)
            user = self.users.find_by_id(user_id, transaction=transaction)
            if not user:
                raise UserNotFound()
            pet = self.pets.find_by_id(pet_id, transaction=transaction)
            if not pet:
                raise PetNotFound()
            if pet.adopted:
                raise AlreadyAdopted()

            # 4~5. 수정 및 입양 기록 생성 (커밋 시점에 한꺼번에 반영)
            adoption = self.adoptions.new_entity({
                'owner': user_id,
                'pet': pet_id,
                'adoption_date': adoption_date,
            })
            pets = list(user.pets)
            if pet_id not in pets:
                pets.append(pet_id)
            self.users.update_in_transaction(transaction, user_id, {'pets': pets})
            self.pets.update_in_transaction(transaction, pet_id, {'adopted': True, 'owner': user_id})
            self.adoptions.insert_in_transaction(transaction, adoption)
            return adoption

        try:
            with store_errors("adoptions.adopt"):
                adoption = _adopt_in_transaction(transaction)
        except (UserNotFound, PetNotFound, AlreadyAdopted) as e:
            logging.info(f"Adoption rejected (user: {user_id}, pet: {pet_id}): {e.error_code}")
            raise

        logging.info(f"Pet {pet_id} adopted by user {user_id} (adoption: {adoption.adoption_id})")
        return adoption
