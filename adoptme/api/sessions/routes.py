# adoptme/api/sessions/routes.py

import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import (
    create_access_token,
    jwt_required,
    get_jwt_identity,
    get_jwt,
    set_access_cookies,
    unset_jwt_cookies,
)
from marshmallow import ValidationError

from adoptme.core.exceptions import InvalidCredentials, StoreError, UserAlreadyExists
from adoptme.core.security import session_claims
from .schemas import RegisterSchema, LoginSchema, CurrentUserSchema

sessions_bp = Blueprint('sessions_bp', __name__)

@sessions_bp.route('/register', methods=['POST'])
def register():
    """회원가입. 성공 시 새 사용자의 id를 payload로 반환합니다."""
    session_service = current_app.services['sessions']
    try:
        validated_data = RegisterSchema().load(request.get_json(silent=True) or {})
        user = session_service.register(validated_data)
        return jsonify({"status": "success", "payload": user.user_id}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except (UserAlreadyExists, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code


@sessions_bp.route('/login', methods=['POST'])
def login():
    """로그인. 세션 JWT를 쿠키(기본 이름 coderCookie)로 발급합니다."""
    session_service = current_app.services['sessions']
    try:
        validated_data = LoginSchema().load(request.get_json(silent=True) or {})
        user = session_service.login(validated_data['email'], validated_data['password'])

        access_token = create_access_token(identity=user.user_id, additional_claims=session_claims(user))
        response = jsonify({"status": "success", "message": "Logged in"})
        set_access_cookies(response, access_token)
        logging.info(f"User logged in: {user.user_id}")
        return response, 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except (InvalidCredentials, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code


@sessions_bp.route('/current', methods=['GET'])
@jwt_required()
def current():
    """세션 쿠키에 담긴 현재 사용자 정보를 반환합니다."""
    claims = get_jwt()
    current_user = {
        "id": get_jwt_identity(),
        "name": claims.get("name"),
        "email": claims.get("email"),
        "role": claims.get("role"),
    }
    return jsonify({"status": "success", "payload": CurrentUserSchema().dump(current_user)}), 200


@sessions_bp.route('/logout', methods=['POST'])
def logout():
    """로그아웃. 세션 쿠키를 제거합니다."""
    response = jsonify({"status": "success", "message": "Logged out"})
    unset_jwt_cookies(response)
    return response, 200
