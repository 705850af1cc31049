# adoptme/api/adoptions/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from adoptme.core.exceptions import AlreadyAdopted, NotFoundError, StoreError
from .schemas import AdoptionRequestSchema, AdoptionResponseSchema

adoptions_bp = Blueprint('adoptions_bp', __name__)

@adoptions_bp.route('', methods=['GET'])
def list_adoptions():
    """전체 입양 기록을 조회합니다."""
    adoption_service = current_app.services['adoptions']
    try:
        adoptions = adoption_service.list_adoptions()
        return jsonify({"status": "success", "payload": AdoptionResponseSchema(many=True).dump(adoptions)}), 200
    except StoreError as e:
        return jsonify(e.to_dict()), e.status_code

@adoptions_bp.route('/<string:adoption_id>', methods=['GET'])
def get_adoption(adoption_id: str):
    adoption_service = current_app.services['adoptions']
    try:
        adoption = adoption_service.get_adoption(adoption_id)
        return jsonify({"status": "success", "payload": AdoptionResponseSchema().dump(adoption)}), 200
    except (NotFoundError, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code

@adoptions_bp.route('/<string:user_id>/<string:pet_id>', methods=['POST'])
def create_adoption(user_id: str, pet_id: str):
    """
    사용자(user_id)가 반려동물(pet_id)을 입양합니다.
    본문에 adoptionDate가 없으면 현재 시각으로 기록합니다.
    """
    adoption_service = current_app.services['adoptions']
    try:
        data = AdoptionRequestSchema().load(request.get_json(silent=True) or {})
        adoption_service.adopt(user_id, pet_id, data.get('adoption_date'))
        return jsonify({"status": "success", "message": "Pet adopted"}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except (NotFoundError, AlreadyAdopted) as e:
        return jsonify(e.to_dict()), e.status_code
    except StoreError as e:
        # 트랜잭션이 롤백되었으므로 클라이언트는 같은 요청을 그대로 재시도할 수 있습니다.
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Adoption API error (user: {user_id}, pet: {pet_id}): {e}", exc_info=True)
        return jsonify({"status": "error", "error_code": "ADOPTION_FAILED", "message": "Unexpected error while adopting."}), 500
