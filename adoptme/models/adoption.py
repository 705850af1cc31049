# adoptme/models/adoption.py
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, Any

from marshmallow import ValidationError

from adoptme.utils.datetime_utils import DateTimeUtils

@dataclass(frozen=True)
class Adoption:
    """
    Firestore 'adoptions' 컬렉션의 문서 구조.
    입양 트랜잭션에서 한 번 생성된 뒤 변경되지 않습니다.
    """
    adoption_id: str
    owner: str  # user_id
    pet: str    # pet_id
    adoption_date: datetime

    def validate(self) -> None:
        missing = {name: ["Missing data for required field."]
                   for name in ('owner', 'pet', 'adoption_date') if not getattr(self, name)}
        if missing:
            raise ValidationError(missing)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Adoption":
        return cls(
            adoption_id=data['adoption_id'],
            owner=data.get('owner'),
            pet=data.get('pet'),
            adoption_date=DateTimeUtils.from_firestore(data.get('adoption_date')),
        )

    def to_firestore(self) -> Dict[str, Any]:
        return DateTimeUtils.for_firestore(asdict(self))
