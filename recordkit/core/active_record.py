"""
ActiveRecord 베이스 클래스
- 엔티티 클래스에서 바로 조회/저장/수정/삭제
- 실제 쿼리는 매 호출마다 새 Record로 실행

사용 예시:
    @dataclass
    class User(ActiveRecord):
        id: Optional[int] = None
        name: str = ""

    key = User(name="jack").save()
    user = User.find_by_id(key.as_int())
    adults = User.query().where("age >= ?", 20).all()
"""

from typing import Any, List, Optional

from .exceptions import UsageError
from .mapper import describe, extract_value
from .models import ResultKey
from .record import Record


class ActiveRecord:
    """엔티티 베이스 클래스 (상태 없음)"""

    @classmethod
    def query(cls) -> Record:
        """새 Record 반환 (체이닝 시작점)"""
        return Record(cls)

    @classmethod
    def find_by_id(cls, id_value: Any) -> Optional[Any]:
        return Record(cls).find_by_id(id_value)

    @classmethod
    def find_all(cls) -> List[Any]:
        return Record(cls).all()

    @classmethod
    def count_all(cls) -> int:
        return Record(cls).count()

    def save(self) -> ResultKey:
        """현재 인스턴스 INSERT"""
        return Record(type(self)).save(self)

    def update(self) -> int:
        """Primary Key 기준으로 나머지 저장 가능한 필드 전체 UPDATE"""
        pk_value = self._pk_value()
        descriptor = describe(type(self))
        record = Record(type(self))
        for field in descriptor.fields:
            if field is descriptor.pk_field:
                continue
            record.set(field.column, extract_value(self, field))
        return record.update_by_id(pk_value)

    def delete(self) -> int:
        """Primary Key 기준 DELETE"""
        return Record(type(self)).delete_by_id(self._pk_value())

    def _pk_value(self) -> Any:
        descriptor = describe(type(self))
        pk_field = descriptor.pk_field
        value = extract_value(self, pk_field) if pk_field else None
        if value is None:
            raise UsageError(
                f"{type(self).__name__} has no primary key value",
                {"pk": descriptor.pk_name}
            )
        return value
