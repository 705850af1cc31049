# adoptme/repositories/adoptions.py
from adoptme.models.adoption import Adoption
from adoptme.repositories.base import FirestoreRepository


class AdoptionRepository(FirestoreRepository):
    """
    'adoptions' 컬렉션 접근 계층.
    입양 기록은 AdoptionService의 트랜잭션에서만 생성되며 수정/삭제 API는 노출하지 않습니다.
    """
    collection_name = 'adoptions'
    model = Adoption
    id_field = 'adoption_id'
