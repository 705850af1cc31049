# adoptme/repositories/base.py
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from google.api_core import exceptions as gcp_exceptions
from firebase_admin.firestore import Transaction

from adoptme.core.exceptions import StoreError
from adoptme.utils.datetime_utils import DateTimeUtils


@contextmanager
def store_errors(operation: str):
    """Firestore 클라이언트 오류(타임아웃, 연결 끊김, 트랜잭션 중단)를 StoreError로 변환합니다."""
    try:
        yield
    except (gcp_exceptions.GoogleAPICallError, gcp_exceptions.RetryError) as e:
        logging.error(f"Record store failure during {operation}: {e}", exc_info=True)
        raise StoreError() from e
    except ValueError as e:
        # 재시도 횟수를 모두 소진한 트랜잭션은 마지막 Aborted를 감싼 ValueError로 끝납니다.
        if not isinstance(e.__cause__, gcp_exceptions.Aborted):
            raise
        logging.error(f"Transaction gave up during {operation}: {e}", exc_info=True)
        raise StoreError() from e


class FirestoreRepository:
    """
    하나의 Firestore 컬렉션에 대한 얇은 접근 계층.

    - id로 조회/수정/삭제할 대상이 없으면 예외 대신 None/False를 반환합니다.
    - 필수 필드 검증은 모델의 validate()에 위임합니다.
    - 트랜잭션용 메서드(*_in_transaction)는 호출 측의 @firestore.transactional 함수 안에서 사용합니다.
    """
    collection_name: str = None
    model = None
    id_field: str = None

    def __init__(self, db):
        self.db = db
        self.collection_ref = db.collection(self.collection_name)

    @staticmethod
    def _is_valid_id(entity_id: Any) -> bool:
        # '/'가 포함되면 하위 컬렉션 경로로 해석되므로 존재하지 않는 id로 취급합니다.
        return isinstance(entity_id, str) and bool(entity_id) and '/' not in entity_id

    def _to_entity(self, snapshot):
        data = snapshot.to_dict() or {}
        data[self.id_field] = snapshot.id
        return self.model.from_dict(data)

    def find_by_id(self, entity_id: str, transaction: Optional[Transaction] = None):
        if not self._is_valid_id(entity_id):
            return None
        with store_errors(f"{self.collection_name}.find_by_id"):
            doc = self.collection_ref.document(entity_id).get(transaction=transaction)
        if not doc.exists:
            return None
        return self._to_entity(doc)

    def find_all(self, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        """equality 조건(filters)에 맞는 모든 문서를 조회합니다."""
        query = self.collection_ref
        for field_name, value in (filters or {}).items():
            query = query.where(field_name, '==', value)
        with store_errors(f"{self.collection_name}.find_all"):
            return [self._to_entity(doc) for doc in query.stream()]

    def new_entity(self, data: Dict[str, Any]):
        """새 id를 발급해 모델 인스턴스를 만들고 필수 필드를 검증합니다. 저장은 하지 않습니다."""
        entity = self.model.from_dict({**data, self.id_field: str(uuid.uuid4())})
        entity.validate()
        return entity

    def insert(self, data: Dict[str, Any]):
        entity = self.new_entity(data)
        entity_id = getattr(entity, self.id_field)
        with store_errors(f"{self.collection_name}.insert"):
            self.collection_ref.document(entity_id).set(entity.to_firestore())
        logging.info(f"Inserted {self.collection_name}/{entity_id}")
        return entity

    def update(self, entity_id: str, patch: Dict[str, Any]):
        if not self._is_valid_id(entity_id):
            return None
        doc_ref = self.collection_ref.document(entity_id)
        with store_errors(f"{self.collection_name}.update"):
            try:
                doc_ref.update(DateTimeUtils.for_firestore(patch))
            except gcp_exceptions.NotFound:
                return None
        logging.info(f"Updated {self.collection_name}/{entity_id} with fields: {list(patch.keys())}")
        return self.find_by_id(entity_id)

    def delete(self, entity_id: str) -> bool:
        if not self._is_valid_id(entity_id):
            return False
        doc_ref = self.collection_ref.document(entity_id)
        with store_errors(f"{self.collection_name}.delete"):
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        logging.info(f"Deleted {self.collection_name}/{entity_id}")
        return True

    # --- 트랜잭션용 ---
    def insert_in_transaction(self, transaction: Transaction, entity) -> None:
        """[트랜잭션용] 이미 검증된 엔티티를 새 문서로 생성합니다. 같은 id가 있으면 커밋이 실패합니다."""
        entity.validate()
        doc_ref = self.collection_ref.document(getattr(entity, self.id_field))
        transaction.create(doc_ref, entity.to_firestore())

    def update_in_transaction(self, transaction: Transaction, entity_id: str, patch: Dict[str, Any]) -> None:
        doc_ref = self.collection_ref.document(entity_id)
        transaction.update(doc_ref, DateTimeUtils.for_firestore(patch))

    def delete_in_transaction(self, transaction: Transaction, entity_id: str) -> None:
        transaction.delete(self.collection_ref.document(entity_id))
