# adoptme/api/adoptions/schemas.py
from marshmallow import Schema, fields, EXCLUDE

from adoptme.utils.datetime_utils import DateTimeUtils

class IsoDateTime(fields.Field):
    """'2024-11-19' 같은 날짜만 있는 값도 허용하는 ISO datetime 필드 (UTC로 정규화)."""
    default_error_messages = {"invalid": "Not a valid ISO date or datetime."}

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return DateTimeUtils.validate_datetime_field(value, attr)
        except ValueError as e:
            raise self.make_error("invalid") from e

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return DateTimeUtils.to_iso_string(value)

class AdoptionRequestSchema(Schema):
    """POST /api/adoptions/<uid>/<pid> 요청 본문 스키마. 본문은 비어 있어도 됩니다."""
    class Meta:
        unknown = EXCLUDE

    adoption_date = IsoDateTime(data_key="adoptionDate", allow_none=True)

class AdoptionResponseSchema(Schema):
    adoption_id = fields.Str(data_key="_id", dump_only=True)
    owner = fields.Str()
    pet = fields.Str()
    adoption_date = IsoDateTime(data_key="adoptionDate")
