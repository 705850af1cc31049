# adoptme/api/adoptions/test_adoption_routes.py
import pytest


def _create_pet(client, **overrides):
    body = {"name": "Capitán", "specie": "Perro", "birthDate": "2019-04-12"}
    body.update(overrides)
    return client.post('/api/pets', json=body).get_json()['payload']['_id']

def _register(client, email="cacho@debuenosaires.com"):
    body = {"first_name": "Cacho", "last_name": "Castaña", "email": email, "password": "1234"}
    return client.post('/api/sessions/register', json=body).get_json()['payload']


class TestAdoptionRoutes:
    def test_adoption_end_to_end(self, client):
        pet_id = _create_pet(client)
        user_id = _register(client)

        response = client.post(f'/api/adoptions/{user_id}/{pet_id}',
                               json={"uid": user_id, "pid": pet_id, "adoptionDate": "2024-11-19"})

        assert response.status_code == 200
        assert response.get_json() == {"status": "success", "message": "Pet adopted"}

        pet = client.get(f'/api/pets/{pet_id}').get_json()['payload']
        assert pet['adopted'] is True
        assert pet['owner'] == user_id

        adoptions = client.get('/api/adoptions').get_json()
        assert adoptions['status'] == 'success'
        assert len(adoptions['payload']) == 1
        assert adoptions['payload'][0]['owner'] == user_id
        assert adoptions['payload'][0]['pet'] == pet_id
        assert adoptions['payload'][0]['adoptionDate'] == "2024-11-19T00:00:00Z"

    def test_adoption_without_body(self, client):
        pet_id = _create_pet(client)
        user_id = _register(client)

        response = client.post(f'/api/adoptions/{user_id}/{pet_id}')
        assert response.status_code == 200

    def test_get_adoption_by_id(self, client):
        pet_id = _create_pet(client)
        user_id = _register(client)
        client.post(f'/api/adoptions/{user_id}/{pet_id}')
        adoption_id = client.get('/api/adoptions').get_json()['payload'][0]['_id']

        response = client.get(f'/api/adoptions/{adoption_id}')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'success'
        assert data['payload']['_id'] == adoption_id

    def test_get_unknown_adoption(self, client):
        assert client.get('/api/adoptions/unknown').status_code == 404

    def test_list_adoptions_is_an_array(self, client):
        response = client.get('/api/adoptions')
        assert response.status_code == 200
        assert response.get_json() == {"status": "success", "payload": []}

    @pytest.mark.parametrize("missing", ["user", "pet"])
    def test_unknown_user_or_pet_returns_404(self, client, missing):
        pet_id = _create_pet(client)
        user_id = _register(client)
        if missing == "user":
            user_id = "unknown-user"
        else:
            pet_id = "unknown-pet"

        response = client.post(f'/api/adoptions/{user_id}/{pet_id}')

        assert response.status_code == 404
        assert response.get_json()['status'] == 'error'

    def test_double_adoption_returns_400(self, client):
        pet_id = _create_pet(client)
        user_id = _register(client)
        client.post(f'/api/adoptions/{user_id}/{pet_id}')

        response = client.post(f'/api/adoptions/{user_id}/{pet_id}')

        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'PET_ALREADY_ADOPTED'
        assert len(client.get('/api/adoptions').get_json()['payload']) == 1

    def test_invalid_adoption_date_returns_400(self, client):
        pet_id = _create_pet(client)
        user_id = _register(client)

        response = client.post(f'/api/adoptions/{user_id}/{pet_id}', json={"adoptionDate": "yesterday-ish"})

        assert response.status_code == 400
        assert 'adoptionDate' in response.get_json()['details']
