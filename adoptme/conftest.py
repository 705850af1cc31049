# adoptme/conftest.py
"""
pytest 공용 픽스처.

Firestore/Storage 대신 메모리 기반 대역(double)을 사용합니다.
- FakeFirestore: 문서 CRUD, equality 쿼리, 트랜잭션(커밋 시 일괄 반영, 실패 시 전체 롤백)
- 트랜잭션은 DB 단위 락으로 직렬화되어 Firestore의 충돌 재시도 결과(나중 트랜잭션이 최신 값을 읽음)를 재현합니다.
- fail_on: 특정 연산에서 google.api_core 예외를 발생시켜 저장소 장애를 흉내냅니다.
"""
import copy
import threading
import uuid

import pytest
from firebase_admin import firestore
from google.api_core import exceptions as gcp_exceptions

from adoptme import create_app
from adoptme.api.adoptions.services import AdoptionService
from adoptme.api.pets.services import PetService
from adoptme.api.users.services import UserService
from adoptme.repositories.adoptions import AdoptionRepository
from adoptme.repositories.pets import PetRepository
from adoptme.repositories.users import UserRepository
from adoptme.services.storage_service import StorageService


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, db, collection_name, doc_id):
        self._db = db
        self._collection_name = collection_name
        self.id = doc_id

    @property
    def _docs(self):
        return self._db.collections.setdefault(self._collection_name, {})

    def get(self, transaction=None, **kwargs):
        self._db.check_failure('get')
        data = self._db.collections.get(self._collection_name, {}).get(self.id)
        return FakeSnapshot(self.id, copy.deepcopy(data))

    def set(self, data):
        self._db.check_failure('set')
        self._docs[self.id] = copy.deepcopy(data)

    def create(self, data):
        self._db.check_failure('create')
        if self.id in self._docs:
            raise gcp_exceptions.Conflict(f"Document already exists: {self.id}")
        self._docs[self.id] = copy.deepcopy(data)

    def update(self, data):
        self._db.check_failure('update')
        if self.id not in self._docs:
            raise gcp_exceptions.NotFound(f"No document to update: {self.id}")
        self._docs[self.id].update(copy.deepcopy(data))

    def delete(self):
        self._db.check_failure('delete')
        self._db.collections.get(self._collection_name, {}).pop(self.id, None)


class FakeQuery:
    def __init__(self, db, collection_name, filters=None, limit=None):
        self._db = db
        self._collection_name = collection_name
        self._filters = filters or []
        self._limit = limit

    def where(self, field_path, op_string, value):
        assert op_string == '==', "FakeQuery only supports equality filters"
        return FakeQuery(self._db, self._collection_name, self._filters + [(field_path, value)], self._limit)

    def limit(self, count):
        return FakeQuery(self._db, self._collection_name, self._filters, count)

    def stream(self):
        self._db.check_failure('stream')
        docs = self._db.collections.get(self._collection_name, {})
        matched = [FakeSnapshot(doc_id, copy.deepcopy(data)) for doc_id, data in docs.items()
                   if all(data.get(f) == v for f, v in self._filters)]
        if self._limit is not None:
            matched = matched[:self._limit]
        return iter(matched)


class FakeCollection(FakeQuery):
    def document(self, doc_id=None):
        return FakeDocumentReference(self._db, self._collection_name, doc_id or uuid.uuid4().hex)


class FakeTransaction:
    def __init__(self, db):
        self._db = db
        self._writes = []

    def set(self, reference, data):
        self._writes.append(('set', reference, data))

    def create(self, reference, data):
        self._writes.append(('create', reference, data))

    def update(self, reference, data):
        self._writes.append(('update', reference, data))

    def delete(self, reference):
        self._writes.append(('delete', reference, None))

    def commit(self):
        """버퍼링된 쓰기를 한꺼번에 반영합니다. 하나라도 실패하면 이전 상태로 되돌립니다."""
        backup = copy.deepcopy(self._db.collections)
        try:
            self._db.check_failure('commit')
            for op, reference, data in self._writes:
                if op == 'delete':
                    reference.delete()
                else:
                    getattr(reference, op)(data)
        except Exception:
            self._db.collections = backup
            raise
        finally:
            self._writes = []


class FakeFirestore:
    def __init__(self):
        self.collections = {}
        self.fail_on = {}
        self.lock = threading.RLock()

    def collection(self, name):
        return FakeCollection(self, name)

    def transaction(self):
        return FakeTransaction(self)

    def check_failure(self, operation):
        error = self.fail_on.get(operation)
        if error is not None:
            raise error

    def docs(self, collection_name):
        return self.collections.get(collection_name, {})


def fake_transactional(to_wrap):
    """firestore.transactional 대역: DB 락 안에서 함수를 실행하고 성공 시에만 커밋합니다."""
    def wrapper(transaction, *args, **kwargs):
        with transaction._db.lock:
            transaction._writes = []
            result = to_wrap(transaction, *args, **kwargs)
            transaction.commit()
            return result
    return wrapper


class FakeBlob:
    def __init__(self, bucket, name):
        self.bucket = bucket
        self.name = name
        self.content = None
        self.content_type = None
        self.is_public = False

    def upload_from_file(self, file_obj, content_type=None):
        self.content = file_obj.read()
        self.content_type = content_type
        self.bucket.blobs[self.name] = self

    def make_public(self):
        self.is_public = True

    def delete(self):
        self.bucket.blobs.pop(self.name, None)

    @property
    def public_url(self):
        return f"https://storage.googleapis.com/adoptme-test.appspot.com/{self.name}"


class FakeBucket:
    def __init__(self):
        self.blobs = {}

    def blob(self, name):
        # blob 참조만으로는 저장되지 않고, 업로드가 끝나야 버킷에 등록됩니다.
        return self.blobs.get(name) or FakeBlob(self, name)


@pytest.fixture
def fake_db(monkeypatch):
    monkeypatch.setattr(firestore, "transactional", fake_transactional)
    return FakeFirestore()


@pytest.fixture
def fake_bucket():
    return FakeBucket()


@pytest.fixture
def user_repository(fake_db):
    return UserRepository(fake_db)


@pytest.fixture
def pet_repository(fake_db):
    return PetRepository(fake_db)


@pytest.fixture
def adoption_repository(fake_db):
    return AdoptionRepository(fake_db)


@pytest.fixture
def adoption_service(fake_db, user_repository, pet_repository, adoption_repository):
    return AdoptionService(fake_db, user_repository, pet_repository, adoption_repository)


@pytest.fixture
def pet_service(fake_db, pet_repository, fake_bucket):
    return PetService(fake_db, pet_repository, StorageService(bucket=fake_bucket))


@pytest.fixture
def user_service(fake_db, user_repository):
    return UserService(fake_db, user_repository)


@pytest.fixture
def user(user_repository):
    return user_repository.insert({
        'first_name': 'Cacho',
        'last_name': 'Castaña',
        'email': 'cacho@debuenosaires.com',
        'password': 'hashed',
    })


@pytest.fixture
def pet(pet_repository):
    return pet_repository.insert({'name': 'Capitán', 'specie': 'Perro'})


@pytest.fixture
def app(fake_db, fake_bucket):
    flask_app = create_app('testing', db=fake_db, storage_service=StorageService(bucket=fake_bucket))
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()
