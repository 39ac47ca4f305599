"""
ActiveRecord 스타일 Record
- QueryBuilder 체이닝 + 종료 연산 (조회 / 저장 / 수정 / 삭제)
- 종료 연산은 성공/실패와 관계없이 빌더 상태 초기화
- 인스턴스 하나는 단일 스레드에서만 사용 (동기화 없음)

사용 예시:
    users = Record(User).where("age > ?", 18).like("name", "j%").order("id DESC").all()
    total = Record(User).where("status", 1).count()
    Record(User).set("name", "jack").update_by_id(7)
"""

from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from .decorators import terminal
from .exceptions import MappingError, UsageError
from .executor import execute_insert, execute_update, fetch_all, fetch_first, fetch_scalar
from .mapper import DEFAULT_PK_NAME, EntityDescriptor, describe, extract_value
from .models import ResultKey
from .query_builder import QueryBuilder, unpack_values

T = TypeVar('T')


class Record(QueryBuilder, Generic[T]):
    """
    엔티티 타입에 바인딩된 쿼리 빌더

    Attributes:
        model_class: 엔티티 타입 (None이면 SQL 직접 실행 용도로만 사용)
        descriptor: 엔티티 매핑 정보
    """

    def __init__(self, model_class: Optional[Type[T]] = None):
        self.model_class = model_class
        self.descriptor: Optional[EntityDescriptor] = describe(model_class) if model_class else None
        if self.descriptor:
            super().__init__(self.descriptor.table_name, self.descriptor.pk_name)
        else:
            super().__init__(None, DEFAULT_PK_NAME)

    def _require_descriptor(self) -> EntityDescriptor:
        if self.descriptor is None:
            raise UsageError("No entity type bound to this record")
        return self.descriptor

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    @terminal
    def all(self) -> List[T]:
        """조건에 맞는 전체 행 조회"""
        descriptor = self._require_descriptor()
        sql, params = self.build()
        return fetch_all(descriptor.model_class, sql, params)

    @terminal
    def one(self) -> Optional[T]:
        """조건에 맞는 첫 번째 행 조회 (LIMIT 1)"""
        descriptor = self._require_descriptor()
        sql, params = self.build(limit_one=True)
        return fetch_first(descriptor.model_class, sql, params)

    @terminal
    def find_by_id(self, id_value: Any) -> Optional[T]:
        """Primary Key로 단일 행 조회"""
        descriptor = self._require_descriptor()
        self.where(self.pk_name, id_value)
        sql, params = self.build()
        return fetch_first(descriptor.model_class, sql, params)

    @terminal
    def find_by_ids(self, *ids: Any) -> List[T]:
        """
        Primary Key 목록으로 조회

        find_by_ids(1, 2, 3), find_by_ids([1, 2, 3]), find_by_ids(range(1, 4))
        ID가 없으면 쿼리 없이 빈 리스트 반환
        """
        descriptor = self._require_descriptor()
        ids = unpack_values(ids)
        if not ids:
            return []

        if len(ids) == 1:
            self.where(self.pk_name, ids[0])
        else:
            self.in_(self.pk_name, ids)
        sql, params = self.build()
        return fetch_all(descriptor.model_class, sql, params)

    @terminal
    def count(self) -> int:
        """조건에 맞는 행 수"""
        sql, params = self.build_count()
        total = fetch_scalar(sql, params)
        return int(total or 0)

    # ------------------------------------------------------------------
    # 변경
    # ------------------------------------------------------------------

    @terminal
    def save(self, instance: T) -> ResultKey:
        """
        인스턴스 INSERT

        exclude()로 지정한 필드는 제외한다.
        Primary Key 필드 값이 None이면 DB 생성 키로 보고 컬럼에서 제외한다.

        Returns:
            ResultKey: 생성된 키
        """
        descriptor = self._require_descriptor()
        if not isinstance(instance, descriptor.model_class):
            raise MappingError(
                f"Expected {descriptor.model_class.__name__} instance, got {type(instance).__name__}"
            )

        pk_field = descriptor.pk_field
        data = {}
        for field in descriptor.fields:
            if field.name in self.excluded_fields:
                continue
            value = extract_value(instance, field)
            if field is pk_field and value is None:
                continue
            data[field.column] = value

        sql, params = self.build_insert(data)
        return execute_insert(sql, params)

    @terminal
    def update(self) -> int:
        """set()으로 지정한 컬럼을 누적된 조건에 맞는 행에 UPDATE"""
        sql, params = self.build_update()
        return execute_update(sql, params)

    @terminal
    def update_by_id(self, id_value: Any) -> int:
        """set()으로 지정한 컬럼을 Primary Key 행에 UPDATE (누적 조건 무시)"""
        sql, params = self.build_update_by_id(id_value)
        return execute_update(sql, params)

    @terminal
    def delete(self) -> int:
        """누적된 조건에 맞는 행 DELETE (조건이 없으면 전체 행)"""
        sql, params = self.build_delete()
        return execute_update(sql, params)

    @terminal
    def delete_by_id(self, id_value: Any) -> int:
        """Primary Key 행 DELETE"""
        sql, params = self.build_delete_by_id(id_value)
        return execute_update(sql, params)

    # ------------------------------------------------------------------
    # SQL 직접 실행 (빌더 상태 미사용)
    # ------------------------------------------------------------------

    @terminal
    def execute(self, sql: str, *params: Any) -> int:
        """SQL 직접 실행, 영향받은 행 수 반환"""
        return execute_update(sql, params)

    @terminal
    def find(self, target: type, sql: str, params: Sequence[Any] = ()) -> Optional[Any]:
        """SQL 직접 조회, 첫 번째 행을 target으로 변환"""
        return fetch_first(target, sql, params)

    @terminal
    def find_by_sql(self, target: type, sql: str, *params: Any) -> List[Any]:
        """SQL 직접 조회, 전체 행을 target으로 변환"""
        return fetch_all(target, sql, params)
