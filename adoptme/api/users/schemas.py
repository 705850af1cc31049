# adoptme/api/users/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

ROLES = ["user", "admin"]

class UserResponseSchema(Schema):
    """
    사용자 응답 스키마.
    비밀번호 해시는 어떤 응답에도 포함하지 않습니다.
    """
    user_id = fields.Str(data_key="_id", dump_only=True)
    first_name = fields.Str()
    last_name = fields.Str()
    email = fields.Email()
    role = fields.Str()
    pets = fields.List(fields.Str())

class UserUpdateSchema(Schema):
    """PUT /api/users/<uid> 부분 수정 스키마. pets/password는 수정할 수 없습니다."""
    class Meta:
        unknown = EXCLUDE

    first_name = fields.Str(validate=validate.Length(min=1))
    last_name = fields.Str(validate=validate.Length(min=1))
    email = fields.Email()
    role = fields.Str(validate=validate.OneOf(ROLES))
