"""
SQL 쿼리 빌더
- 체이닝 방식으로 WHERE / SELECT / ORDER BY / SET 상태 누적
- 누적된 상태로 SELECT, COUNT, INSERT, UPDATE, DELETE 쿼리 생성
- 모든 값은 '?' 플레이스홀더로 바인딩 (SQL Injection 방지)
"""

import logging
from collections import abc
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from .exceptions import UsageError
from .filter_builder import FilterCondition, FilterOperator, render_conditions

logger = logging.getLogger(__name__)

# where(statement) 단일 인자 호출 구분용
_NO_VALUE = object()


def unpack_values(values: Tuple[Any, ...]) -> Tuple[Any, ...]:
    """
    가변 인자 정규화

    값이 하나이고 str/bytes가 아닌 Iterable이면 (list, range, dict.keys(), 제너레이터 ...)
    그 요소들을 값으로 사용한다.

    >>> unpack_values((range(1, 4),))
    (1, 2, 3)
    >>> unpack_values(("abc",))
    ('abc',)
    """
    if len(values) == 1:
        value = values[0]
        if isinstance(value, abc.Iterable) and not isinstance(value, (str, bytes, bytearray)):
            return tuple(value)
    return tuple(values)


class Statement(NamedTuple):
    """완성된 SQL 문과 바인딩 파라미터 (불변)"""
    sql: str
    params: Tuple[Any, ...]


class QueryBuilder:
    """
    SQL 쿼리를 동적으로 생성하는 빌더 클래스

    build 계열 메서드는 상태를 변경하지 않는다.
    상태 초기화는 reset()으로만 이루어진다.

    Attributes:
        table: 테이블 이름
        pk_name: Primary Key 컬럼 이름
    """

    def __init__(self, table: Optional[str] = None, pk_name: str = "id"):
        self.table = table
        self.pk_name = pk_name
        self.reset()

    def reset(self) -> None:
        """누적된 상태 전체 초기화"""
        self.select_columns: Optional[str] = None
        self.where_conditions: List[FilterCondition] = []
        self.order_clause: Optional[str] = None
        self.update_columns: Dict[str, Any] = {}
        self.excluded_fields: Set[str] = set()

    # ------------------------------------------------------------------
    # 체이닝 메서드
    # ------------------------------------------------------------------

    def select(self, *columns: str) -> 'QueryBuilder':
        """SELECT 컬럼 지정 (재설정 전까지 한 번만 호출 가능)"""
        if self.select_columns is not None:
            raise UsageError(
                "Select method can only be called once.",
                {"columns": self.select_columns}
            )
        self.select_columns = ', '.join(columns)
        return self

    def where(self, statement: str, *values: Any) -> 'QueryBuilder':
        """
        WHERE 조건 추가

        where("age > 18")            -> age > 18
        where("name", "jack")        -> name = ?
        where("age > ?", 18)         -> age > ?
        """
        self.where_conditions.append(FilterCondition.raw(statement, *values))
        return self

    def and_(self, statement: str, value: Any = _NO_VALUE) -> 'QueryBuilder':
        """where(statement, value)와 동일"""
        if value is _NO_VALUE:
            return self.where(statement)
        return self.where(statement, value)

    def not_(self, column: str, value: Any) -> 'QueryBuilder':
        """WHERE 부등호 조건 추가"""
        self.where_conditions.append(FilterCondition(column, FilterOperator.NOT_EQUALS, (value,)))
        return self

    def is_not_null(self, column: str) -> 'QueryBuilder':
        """WHERE IS NOT NULL 조건 추가"""
        self.where_conditions.append(FilterCondition(column, FilterOperator.IS_NOT_NULL))
        return self

    def like(self, column: str, value: Any) -> 'QueryBuilder':
        """WHERE LIKE 조건 추가 (와일드카드는 호출자가 value에 포함)"""
        self.where_conditions.append(FilterCondition(column, FilterOperator.LIKE, (value,)))
        return self

    def in_(self, column: str, *values: Any) -> 'QueryBuilder':
        """
        WHERE IN 조건 추가

        in_("id", [1, 2, 3]) 또는 in_("id", 1, 2, 3) 모두 허용.
        값이 2개 이상일 때만 조건이 추가된다 (0~1개는 무시).
        """
        values = unpack_values(values)

        if len(values) > 1:
            self.where_conditions.append(FilterCondition(column, FilterOperator.IN, values))
        else:
            logger.warning(f"[QueryBuilder] IN condition on '{column}' skipped ({len(values)} value(s))")
        return self

    def between(self, column: str, start: Any, end: Any) -> 'QueryBuilder':
        """WHERE BETWEEN 조건 추가"""
        self.where_conditions.append(FilterCondition(column, FilterOperator.BETWEEN, (start, end)))
        return self

    def order(self, expression: str) -> 'QueryBuilder':
        """ORDER BY 절 지정 (이전 값 덮어씀)"""
        self.order_clause = expression
        return self

    def exclude(self, *field_names: str) -> 'QueryBuilder':
        """INSERT 시 제외할 필드 이름 추가"""
        self.excluded_fields.update(field_names)
        return self

    execlud = exclude

    def set(self, column: str, value: Any) -> 'QueryBuilder':
        """UPDATE SET 컬럼 지정 (같은 컬럼은 마지막 값 사용)"""
        self.update_columns[column] = value
        return self

    # ------------------------------------------------------------------
    # 상태 조회
    # ------------------------------------------------------------------

    @property
    def has_conditions(self) -> bool:
        return bool(self.where_conditions)

    @property
    def params(self) -> List[Any]:
        """현재 WHERE 조건에 바인딩될 파라미터 (추가 순서)"""
        params: List[Any] = []
        for condition in self.where_conditions:
            params.extend(condition.values)
        return params

    # ------------------------------------------------------------------
    # 쿼리 생성
    # ------------------------------------------------------------------

    def build(self, limit_one: bool = False) -> Statement:
        """
        SELECT 쿼리 생성

        Args:
            limit_one: True일 경우 'LIMIT 1' 추가

        Returns:
            Statement: SQL 쿼리 문자열과 파라미터
        """
        query_parts = [f"SELECT {self.select_columns or '*'}"]
        query_parts.append(f"FROM {self._require_table()}")
        params = self._append_where(query_parts)

        # ORDER BY
        if self.order_clause:
            query_parts.append(f"ORDER BY {self.order_clause}")

        if limit_one:
            query_parts.append("LIMIT 1")

        return Statement(" ".join(query_parts), tuple(params))

    def build_count(self) -> Statement:
        """COUNT 쿼리 생성 (ORDER BY 무시)"""
        query_parts = ["SELECT COUNT(*)"]
        query_parts.append(f"FROM {self._require_table()}")
        params = self._append_where(query_parts)

        return Statement(" ".join(query_parts), tuple(params))

    def build_insert(self, data: Dict[str, Any]) -> Statement:
        """INSERT 쿼리 생성"""
        return build_insert_query(self._require_table(), data)

    def build_update(self) -> Statement:
        """
        UPDATE 쿼리 생성 (누적된 WHERE 조건 사용)

        파라미터 순서: SET 값 -> WHERE 값
        """
        where_clause, where_params = "", []
        if self.has_conditions:
            where_clause, where_params = render_conditions(self.where_conditions)
        return build_update_query(self._require_table(), self.update_columns, where_clause, where_params)

    def build_update_by_id(self, id_value: Any) -> Statement:
        """UPDATE 쿼리 생성 (WHERE는 항상 Primary Key 조건, 누적 조건 무시)"""
        return build_update_query(
            self._require_table(), self.update_columns, f"{self.pk_name} = ?", [id_value]
        )

    def build_delete(self) -> Statement:
        """DELETE 쿼리 생성 (누적된 WHERE 조건 사용)"""
        where_clause, where_params = "", []
        if self.has_conditions:
            where_clause, where_params = render_conditions(self.where_conditions)
        return build_delete_query(self._require_table(), where_clause, where_params)

    def build_delete_by_id(self, id_value: Any) -> Statement:
        """DELETE 쿼리 생성 (Primary Key 조건)"""
        return build_delete_query(self._require_table(), f"{self.pk_name} = ?", [id_value])

    def _require_table(self) -> str:
        if not self.table:
            raise UsageError("No table bound to this builder")
        return self.table

    def _append_where(self, query_parts: List[str]) -> List[Any]:
        if not self.has_conditions:
            return []
        where_clause, params = render_conditions(self.where_conditions)
        query_parts.append(f"WHERE {where_clause}")
        return params


def build_insert_query(table: str, data: Dict[str, Any]) -> Statement:
    """
    INSERT 쿼리 생성

    Args:
        table: 테이블 이름
        data: 삽입할 데이터 딕셔너리 (컬럼 순서 유지)

    Returns:
        Statement: INSERT 쿼리와 파라미터
    """
    if not data:
        raise UsageError(f"No columns to insert into {table}")

    columns = list(data.keys())
    placeholders = ', '.join(['?'] * len(columns))
    column_names = ', '.join(columns)

    query = f"INSERT INTO {table} ({column_names}) VALUES ({placeholders})"
    return Statement(query, tuple(data.values()))


def build_update_query(
    table: str,
    data: Dict[str, Any],
    where_clause: str = "",
    where_params: Sequence[Any] = ()
) -> Statement:
    """
    UPDATE 쿼리 생성

    Args:
        table: 테이블 이름
        data: 업데이트할 데이터 딕셔너리
        where_clause: 'WHERE' 키워드를 제외한 조건문 (없으면 전체 행)
        where_params: 조건 파라미터

    Returns:
        Statement: UPDATE 쿼리와 파라미터
    """
    if not data:
        raise UsageError(f"No columns to update in {table}, call set() first")

    set_clauses = [f"{col} = ?" for col in data.keys()]
    query = f"UPDATE {table} SET {', '.join(set_clauses)}"
    if where_clause:
        query += f" WHERE {where_clause}"

    params = list(data.values()) + list(where_params)
    return Statement(query, tuple(params))


def build_delete_query(table: str, where_clause: str = "", where_params: Iterable[Any] = ()) -> Statement:
    """
    DELETE 쿼리 생성

    Args:
        table: 테이블 이름
        where_clause: 'WHERE' 키워드를 제외한 조건문 (없으면 전체 행)
        where_params: 조건 파라미터

    Returns:
        Statement: DELETE 쿼리와 파라미터
    """
    query = f"DELETE FROM {table}"
    if where_clause:
        query += f" WHERE {where_clause}"

    return Statement(query, tuple(where_params))
