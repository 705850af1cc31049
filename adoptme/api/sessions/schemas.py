# adoptme/api/sessions/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

class RegisterSchema(Schema):
    """회원가입 요청의 유효성을 검사하는 스키마"""
    class Meta:
        unknown = EXCLUDE

    first_name = fields.Str(required=True, validate=validate.Length(min=1))
    last_name = fields.Str(required=True, validate=validate.Length(min=1))
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=1))

class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True)

class CurrentUserSchema(Schema):
    """GET /api/sessions/current 응답 스키마 (세션 쿠키의 클레임)"""
    id = fields.Str()
    name = fields.Str()
    email = fields.Email()
    role = fields.Str()
