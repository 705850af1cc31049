# adoptme/api/mocks/routes.py
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from adoptme.core.exceptions import StoreError
from adoptme.api.pets.schemas import PetResponseSchema
from adoptme.api.users.schemas import UserResponseSchema
from .schemas import GenerateDataSchema, MockCountSchema

mocks_bp = Blueprint('mocks_bp', __name__)

@mocks_bp.route('/mockingpets', methods=['GET'])
def mocking_pets():
    """저장하지 않은 mock 반려동물 목록을 반환합니다."""
    mock_service = current_app.services['mocks']
    try:
        count = MockCountSchema().load(request.args.to_dict())['count']
        pets = mock_service.generate_pets(count)
        return jsonify({"status": "success", "payload": PetResponseSchema(many=True).dump(pets)}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400

@mocks_bp.route('/mockingusers', methods=['GET'])
def mocking_users():
    """저장하지 않은 mock 사용자 목록을 반환합니다. 비밀번호는 응답에 포함되지 않습니다."""
    mock_service = current_app.services['mocks']
    try:
        count = MockCountSchema().load(request.args.to_dict())['count']
        users = mock_service.generate_users(count)
        return jsonify({"status": "success", "payload": UserResponseSchema(many=True).dump(users)}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400

@mocks_bp.route('/generateData', methods=['POST'])
def generate_data():
    """{"users": n, "pets": m} 만큼 mock 데이터를 생성해 저장합니다."""
    mock_service = current_app.services['mocks']
    try:
        counts = GenerateDataSchema().load(request.get_json(silent=True) or {})
        created = mock_service.generate_data(counts['users'], counts['pets'])
        return jsonify({"status": "success", "payload": created}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except StoreError as e:
        return jsonify(e.to_dict()), e.status_code
