# adoptme/models/user.py
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any

from marshmallow import ValidationError

REQUIRED_FIELDS = ('first_name', 'last_name', 'email', 'password')

@dataclass
class User:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    password에는 해시된 값만 저장됩니다.
    """
    user_id: str
    first_name: str
    last_name: str
    email: str
    password: str
    role: str = "user"
    pets: List[str] = field(default_factory=list) # 입양한 반려동물 ID (입양 순서대로)

    def validate(self) -> None:
        missing = {name: ["Missing data for required field."]
                   for name in REQUIRED_FIELDS if not getattr(self, name)}
        if missing:
            raise ValidationError(missing)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        processed_data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        for name in REQUIRED_FIELDS:
            processed_data.setdefault(name, None)
        if processed_data.get('role') is None:
            processed_data['role'] = "user"
        if processed_data.get('pets') is None:
            processed_data['pets'] = []
        return cls(**processed_data)

    def to_firestore(self) -> Dict[str, Any]:
        return asdict(self)
