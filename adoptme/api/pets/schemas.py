# adoptme/api/pets/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

class PetCreateSchema(Schema):
    """POST /api/pets, POST /api/pets/withimage 반려동물 등록 요청 스키마."""
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    specie = fields.Str(allow_none=True, validate=validate.Length(max=50))
    birth_date = fields.Date(data_key="birthDate", allow_none=True)

class PetUpdateSchema(Schema):
    """PUT /api/pets/<pid> 부분 수정 스키마. adopted/owner는 입양 API로만 변경됩니다."""
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(validate=validate.Length(min=1, max=50))
    specie = fields.Str(allow_none=True, validate=validate.Length(max=50))
    birth_date = fields.Date(data_key="birthDate", allow_none=True)

class PetResponseSchema(Schema):
    """반려동물 응답 스키마."""
    pet_id = fields.Str(data_key="_id", dump_only=True)
    name = fields.Str()
    specie = fields.Str(allow_none=True)
    birth_date = fields.Date(data_key="birthDate", allow_none=True)
    adopted = fields.Bool()
    image = fields.Str(allow_none=True)
    owner = fields.Str(allow_none=True)
