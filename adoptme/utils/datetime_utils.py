# adoptme/utils/datetime_utils.py
"""
날짜/시간 처리를 위한 공용 유틸리티 모듈

- 반려동물 생일(birthDate), 입양일(adoptionDate) 파싱
- Firestore 저장/조회 시 date <-> datetime 변환
- 모든 시간은 UTC 기준으로 통일
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Any, Optional
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 UTC datetime으로 파싱

        날짜만 있는 문자열(2024-11-19)은 해당 일자 00:00 UTC로 해석합니다.
        """
        try:
            if not iso_string:
                raise ValueError("empty string")

            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'

            dt = dateutil_parser.isoparse(iso_string)
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt.astimezone(timezone.utc)

        except (ValueError, OverflowError) as e:
            logger.warning(f"Failed to parse ISO datetime '{iso_string}': {e}")
            raise ValueError(f"Invalid ISO datetime: {iso_string}")

    @staticmethod
    def parse_date_string(date_string: str) -> date:
        """날짜 문자열(2019-04-12, 2019/04/12 등)을 date 객체로 파싱"""
        try:
            if not date_string:
                raise ValueError("empty string")
            return dateutil_parser.parse(date_string).date()
        except (ValueError, OverflowError) as e:
            logger.warning(f"Failed to parse date '{date_string}': {e}")
            raise ValueError(f"Invalid date: {date_string}")

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime 객체를 Z 접미사가 붙은 ISO 문자열로 변환"""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        else:
            dt = dt.astimezone(timezone.utc)
        return dt.isoformat().replace('+00:00', 'Z')

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Firestore 저장을 위해 날짜/시간 값을 변환합니다.

        - date -> datetime (00:00:00 UTC). Firestore는 date 타입을 저장하지 못합니다.
        - timezone-naive datetime -> UTC datetime
        - dict/list 내부는 재귀적으로 변환
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        if isinstance(obj, date):
            return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)
        if isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """Firestore Timestamp(DatetimeWithNanoseconds 포함)를 UTC datetime으로 변환"""
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        if isinstance(obj, dict):
            return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [DateTimeUtils.from_firestore(item) for item in obj]
        return obj

    @staticmethod
    def to_date(value: Any) -> Optional[date]:
        """Firestore 값/문자열/datetime 어느 것이든 date로 변환. None은 그대로 반환."""
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            return DateTimeUtils.parse_date_string(value)
        raise ValueError(f"Cannot convert {type(value).__name__} to date")

    @staticmethod
    def validate_datetime_field(value: Any, field_name: str = "datetime") -> datetime:
        """
        API 요청에서 받은 datetime 값을 검증하고 변환

        Raises:
            ValueError: 값이 없거나 파싱할 수 없는 경우
        """
        if value is None:
            raise ValueError(f"{field_name} is required")
        if isinstance(value, str):
            return DateTimeUtils.parse_iso_datetime(value)
        if isinstance(value, datetime):
            return DateTimeUtils.for_firestore(value)
        if isinstance(value, date):
            return DateTimeUtils.for_firestore(value)
        raise ValueError(f"{field_name} must be a string or datetime, got {type(value).__name__}")

