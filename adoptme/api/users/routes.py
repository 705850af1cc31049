# adoptme/api/users/routes.py
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from adoptme.core.exceptions import StoreError, UserAlreadyExists, UserHasPets, UserNotFound
from adoptme.api.users.schemas import UserResponseSchema, UserUpdateSchema

users_bp = Blueprint('users_bp', __name__)

@users_bp.route('', methods=['GET'])
def list_users():
    user_service = current_app.services['users']
    try:
        users = user_service.list_users()
        return jsonify({"status": "success", "payload": UserResponseSchema(many=True).dump(users)}), 200
    except StoreError as e:
        return jsonify(e.to_dict()), e.status_code

@users_bp.route('/<string:user_id>', methods=['GET'])
def get_user(user_id: str):
    user_service = current_app.services['users']
    try:
        user = user_service.get_user(user_id)
        return jsonify({"status": "success", "payload": UserResponseSchema().dump(user)}), 200
    except (UserNotFound, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code

@users_bp.route('/<string:user_id>', methods=['PUT'])
def update_user(user_id: str):
    """사용자 정보 부분 수정. pets와 password는 이 API로 변경할 수 없습니다."""
    user_service = current_app.services['users']
    try:
        update_data = UserUpdateSchema().load(request.get_json(silent=True) or {})
        user_service.update_user(user_id, update_data)
        return jsonify({"status": "success", "message": "User updated"}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"status": "error", "error_code": "INVALID_PAYLOAD", "message": str(e)}), 400
    except (UserNotFound, UserAlreadyExists, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code

@users_bp.route('/<string:user_id>', methods=['DELETE'])
def delete_user(user_id: str):
    user_service = current_app.services['users']
    try:
        user_service.delete_user(user_id)
        return jsonify({"status": "success", "message": "User deleted"}), 200
    except (UserNotFound, UserHasPets, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code
