# adoptme/repositories/pets.py
from adoptme.models.pet import Pet
from adoptme.repositories.base import FirestoreRepository


class PetRepository(FirestoreRepository):
    """'pets' 컬렉션 접근 계층."""
    collection_name = 'pets'
    model = Pet
    id_field = 'pet_id'
