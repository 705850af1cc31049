# adoptme/api/pets/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from adoptme.core.exceptions import AlreadyAdopted, PetNotFound, StoreError
from .schemas import PetCreateSchema, PetUpdateSchema, PetResponseSchema

pets_bp = Blueprint('pets_bp', __name__)

@pets_bp.route('', methods=['GET'])
def list_pets():
    pet_service = current_app.services['pets']
    try:
        pets = pet_service.list_pets()
        return jsonify({"status": "success", "payload": PetResponseSchema(many=True).dump(pets)}), 200
    except StoreError as e:
        return jsonify(e.to_dict()), e.status_code

@pets_bp.route('', methods=['POST'])
def create_pet():
    """반려동물 등록 API. name은 필수입니다."""
    pet_service = current_app.services['pets']
    try:
        validated_data = PetCreateSchema().load(request.get_json(silent=True) or {})
        new_pet = pet_service.create_pet(validated_data)
        return jsonify({"status": "success", "payload": PetResponseSchema().dump(new_pet)}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except StoreError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Pet registration API error: {e}", exc_info=True)
        return jsonify({"status": "error", "error_code": "PET_REGISTRATION_FAILED", "message": str(e)}), 500

@pets_bp.route('/withimage', methods=['POST'])
def create_pet_with_image():
    """multipart/form-data (name, specie, birthDate, image)로 이미지가 첨부된 반려동물을 등록합니다."""
    pet_service = current_app.services['pets']
    try:
        validated_data = PetCreateSchema().load(request.form.to_dict())
        image = request.files.get('image')
        if not image or not image.filename:
            return jsonify({"status": "error", "error_code": "IMAGE_REQUIRED", "message": "'image' file is required."}), 400

        new_pet = pet_service.create_pet_with_image(validated_data, image)
        return jsonify({"status": "success", "payload": PetResponseSchema().dump(new_pet)}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"status": "error", "error_code": "INVALID_IMAGE", "message": str(e)}), 400
    except StoreError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Pet registration with image API error: {e}", exc_info=True)
        return jsonify({"status": "error", "error_code": "IMAGE_UPLOAD_FAILED", "message": "Failed to upload pet image."}), 500

@pets_bp.route('/<string:pet_id>', methods=['GET'])
def get_pet(pet_id: str):
    pet_service = current_app.services['pets']
    try:
        pet = pet_service.get_pet(pet_id)
        return jsonify({"status": "success", "payload": PetResponseSchema().dump(pet)}), 200
    except (PetNotFound, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code

@pets_bp.route('/<string:pet_id>', methods=['PUT'])
def update_pet(pet_id: str):
    """반려동물 정보를 부분 수정합니다. 입양 상태는 변경할 수 없습니다."""
    pet_service = current_app.services['pets']
    try:
        update_data = PetUpdateSchema().load(request.get_json(silent=True) or {})
        pet_service.update_pet(pet_id, update_data)
        return jsonify({"status": "success", "message": "pet updated"}), 200
    except ValidationError as err:
        return jsonify({"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"status": "error", "error_code": "INVALID_PAYLOAD", "message": str(e)}), 400
    except (PetNotFound, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code

@pets_bp.route('/<string:pet_id>', methods=['DELETE'])
def delete_pet(pet_id: str):
    pet_service = current_app.services['pets']
    try:
        pet_service.delete_pet(pet_id)
        return jsonify({"status": "success", "message": "pet deleted"}), 200
    except (PetNotFound, AlreadyAdopted, StoreError) as e:
        return jsonify(e.to_dict()), e.status_code
