# adoptme/api/mocks/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

MAX_MOCKS = 500

class MockCountSchema(Schema):
    """GET /api/mocks/mockingpets, /mockingusers 쿼리 스트링 (?count=)"""
    class Meta:
        unknown = EXCLUDE

    count = fields.Int(load_default=50, validate=validate.Range(min=1, max=MAX_MOCKS))

class GenerateDataSchema(Schema):
    """POST /api/mocks/generateData 요청 본문. 저장할 사용자/반려동물 수"""
    class Meta:
        unknown = EXCLUDE

    users = fields.Int(load_default=0, validate=validate.Range(min=0, max=MAX_MOCKS))
    pets = fields.Int(load_default=0, validate=validate.Range(min=0, max=MAX_MOCKS))
