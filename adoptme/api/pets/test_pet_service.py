# adoptme/api/pets/test_pet_service.py
import io
import threading

import pytest
from google.api_core import exceptions as gcp_exceptions
from werkzeug.datastructures import FileStorage

from adoptme.core.exceptions import AlreadyAdopted, PetNotFound, StoreError


def test_delete_pet_removes_document(pet_service, pet, fake_db):
    pet_service.delete_pet(pet.pet_id)
    assert fake_db.docs('pets') == {}

def test_delete_unknown_pet(pet_service):
    with pytest.raises(PetNotFound):
        pet_service.delete_pet('missing-pet')

def test_delete_adopted_pet_is_rejected(pet_service, adoption_service, user, pet, fake_db):
    adoption_service.adopt(user.user_id, pet.pet_id)

    with pytest.raises(AlreadyAdopted):
        pet_service.delete_pet(pet.pet_id)
    assert pet.pet_id in fake_db.docs('pets')

def test_adoption_racing_a_delete_never_leaves_dangling_records(pet_service, adoption_service, user, pet,
                                                                 pet_repository, user_repository, fake_db,
                                                                 monkeypatch):
    """삭제 트랜잭션이 입양 여부를 읽은 직후 같은 반려동물의 입양이 시도되는 경우."""
    outcome = []

    def adopt():
        try:
            adoption_service.adopt(user.user_id, pet.pet_id)
            outcome.append('adopted')
        except PetNotFound:
            outcome.append('pet gone')

    racer = threading.Thread(target=adopt)
    original_find_by_id = pet_repository.find_by_id

    def find_then_race(pet_id, transaction=None):
        found = original_find_by_id(pet_id, transaction=transaction)
        if not racer.is_alive() and not outcome:
            racer.start()
            racer.join(timeout=0.2)
        return found

    monkeypatch.setattr(pet_repository, 'find_by_id', find_then_race)
    pet_service.delete_pet(pet.pet_id)
    racer.join()

    assert outcome == ['pet gone']
    assert fake_db.docs('pets') == {}
    assert fake_db.docs('adoptions') == {}
    assert user_repository.find_by_id(user.user_id).pets == []

def test_update_with_empty_patch_on_unknown_pet_is_not_found(pet_service):
    with pytest.raises(PetNotFound):
        pet_service.update_pet('missing-pet', {})

def test_failed_insert_removes_uploaded_image(pet_service, fake_db, fake_bucket):
    image = FileStorage(stream=io.BytesIO(b"\xff\xd8"), filename="gato.jpg", content_type="image/jpeg")
    fake_db.fail_on['set'] = gcp_exceptions.ServiceUnavailable("unavailable")

    with pytest.raises(StoreError):
        pet_service.create_pet_with_image({'name': 'Michi'}, image)
    assert fake_bucket.blobs == {}
    assert fake_db.docs('pets') == {}
