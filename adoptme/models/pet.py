# adoptme/models/pet.py
from dataclasses import dataclass, asdict
from datetime import date
from typing import Optional, Dict, Any
import logging

from marshmallow import ValidationError

from adoptme.utils.datetime_utils import DateTimeUtils

@dataclass
class Pet:
    """
    Firestore 'pets' 컬렉션 문서 구조.
    adopted/owner는 입양 트랜잭션에서만 변경되며, 항상 함께 설정됩니다.
    """
    pet_id: str
    name: str
    specie: Optional[str] = None
    birth_date: Optional[date] = None
    adopted: bool = False
    image: Optional[str] = None
    owner: Optional[str] = None

    def validate(self) -> None:
        """필수 필드 검증. 누락 시 marshmallow.ValidationError를 발생시킵니다."""
        if not self.name or not str(self.name).strip():
            raise ValidationError({"name": ["Missing data for required field."]})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pet":
        """
        Firestore에서 받은 딕셔너리로부터 Pet 인스턴스를 생성합니다.
        Timestamp로 저장된 birth_date는 date 객체로 되돌립니다.
        """
        processed_data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        # 누락된 필수 필드는 None으로 채우고 validate()에서 걸러냅니다.
        processed_data.setdefault('name', None)

        try:
            processed_data['birth_date'] = DateTimeUtils.to_date(processed_data.get('birth_date'))
        except ValueError:
            logging.warning(f"Invalid birth_date '{processed_data.get('birth_date')}' for pet {processed_data.get('pet_id')}")
            processed_data['birth_date'] = None

        processed_data['adopted'] = bool(processed_data.get('adopted', False))
        return cls(**processed_data)

    def to_firestore(self) -> Dict[str, Any]:
        return DateTimeUtils.for_firestore(asdict(self))
