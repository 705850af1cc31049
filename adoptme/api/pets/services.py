# adoptme/api/pets/services.py
import logging
from typing import Dict, Any, List

from firebase_admin import firestore
from firebase_admin.firestore import Transaction
from werkzeug.datastructures import FileStorage

from adoptme.core.exceptions import AlreadyAdopted, PetNotFound
from adoptme.models.pet import Pet
from adoptme.repositories.base import store_errors
from adoptme.repositories.pets import PetRepository
from adoptme.services.storage_service import StorageService


class PetService:
    """반려동물 CRUD와 이미지 첨부를 담당하는 서비스. 입양 관련 필드는 AdoptionService만 변경합니다."""
    def __init__(self, db, pet_repository: PetRepository, storage_service: StorageService):
        self.db = db
        self.pets = pet_repository
        self.storage_service = storage_service
        logging.info("PetService initialized with dependencies.")

    def list_pets(self) -> List[Pet]:
        return self.pets.find_all()

    def get_pet(self, pet_id: str) -> Pet:
        pet = self.pets.find_by_id(pet_id)
        if not pet:
            raise PetNotFound()
        return pet

    def create_pet(self, pet_data: Dict[str, Any]) -> Pet:
        """새 반려동물을 등록합니다. 생성 시점에는 항상 입양 전 상태입니다."""
        data = dict(pet_data, adopted=False, owner=None)
        return self.pets.insert(data)

    def create_pet_with_image(self, pet_data: Dict[str, Any], image: FileStorage) -> Pet:
        """
        이미지를 먼저 업로드한 뒤, 공개 URL을 image 필드에 담아 반려동물을 등록합니다.
        등록에 실패하면 업로드한 이미지를 지웁니다.
        """
        uploaded = self.storage_service.upload_pet_image(image)
        try:
            return self.create_pet(dict(pet_data, image=uploaded['public_url']))
        except Exception:
            self.storage_service.delete_file(uploaded['file_path'])
            raise

    def update_pet(self, pet_id: str, update_data: Dict[str, Any]) -> Pet:
        self.get_pet(pet_id)
        if not update_data:
            raise ValueError("No fields to update.")
        updated_pet = self.pets.update(pet_id, update_data)
        if not updated_pet:
            raise PetNotFound()
        return updated_pet

    def delete_pet(self, pet_id: str) -> None:
        """
        [트랜잭션] 입양된 반려동물은 입양 기록과의 정합성을 위해 삭제할 수 없습니다.

        입양 여부 확인과 삭제를 한 트랜잭션에서 처리하므로, 그 사이에 커밋된 입양은
        충돌로 이어져 재시도 시 AlreadyAdopted로 실패합니다.
        """
        transaction = self.db.transaction()

        @firestore.transactional
        def _delete_in_transaction(transaction: Transaction) -> None:
            pet = self.pets.find_by_id(pet_id, transaction=transaction)
            if not pet:
                raise PetNotFound()
            if pet.adopted:
                raise AlreadyAdopted("Adopted pets cannot be deleted")
            self.pets.delete_in_transaction(transaction, pet_id)

        with store_errors("pets.delete"):
            _delete_in_transaction(transaction)
        logging.info(f"Pet {pet_id} deleted")
