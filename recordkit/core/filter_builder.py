"""
필터 조건 (WHERE 절 토큰)
- 조건을 문자열이 아닌 구조화된 토큰으로 보관
- 렌더링 시점에 SQL 조각과 파라미터를 함께 생성
- AND 결합만 지원 (OR 없음)
"""

from enum import Enum
from typing import Any, List, Tuple

from .exceptions import UsageError


class FilterOperator(Enum):
    """필터 연산자"""
    RAW = ""
    EQUALS = "="
    NOT_EQUALS = "!="
    LIKE = "LIKE"
    IN = "IN"
    BETWEEN = "BETWEEN"
    IS_NOT_NULL = "IS NOT NULL"


class FilterCondition:
    """단일 필터 조건"""

    def __init__(self, column: str, operator: FilterOperator, values: Tuple[Any, ...] = ()):
        self.column = column
        self.operator = operator
        self.values = tuple(values)

    @classmethod
    def raw(cls, statement: str, *values: Any) -> 'FilterCondition':
        """
        사용자가 작성한 조건문 그대로 사용

        값이 1개이고 조건문에 '?'가 없으면 '= ?'를 붙인다.
        그 외에는 '?' 개수와 값 개수가 같아야 한다.
        """
        placeholders = statement.count("?")
        if values and placeholders == 0 and len(values) == 1:
            return cls(statement, FilterOperator.EQUALS, values)
        if values and placeholders != len(values):
            raise UsageError(
                f"Placeholder count ({placeholders}) does not match value count ({len(values)})",
                {"statement": statement, "values": len(values)}
            )
        return cls(statement, FilterOperator.RAW, values)

    def to_sql(self) -> Tuple[str, List[Any]]:
        """SQL 조건문과 파라미터 반환"""
        if self.operator == FilterOperator.RAW:
            return self.column, list(self.values)

        if self.operator == FilterOperator.IS_NOT_NULL:
            return f"{self.column} IS NOT NULL", []

        if self.operator == FilterOperator.IN:
            placeholders = ', '.join(['?'] * len(self.values))
            return f"{self.column} IN ({placeholders})", list(self.values)

        if self.operator == FilterOperator.BETWEEN:
            return f"{self.column} BETWEEN ? AND ?", list(self.values)

        # 기본 연산자 (=, !=, LIKE)
        return f"{self.column} {self.operator.value} ?", list(self.values)

    def __repr__(self) -> str:
        return f"FilterCondition({self.column!r}, {self.operator.name}, {self.values!r})"


def render_conditions(conditions: List[FilterCondition]) -> Tuple[str, List[Any]]:
    """
    조건 목록을 AND로 결합

    Args:
        conditions: 필터 조건 리스트 (1개 이상)

    Returns:
        (where_clause, params): 'WHERE' 키워드를 제외한 조건문과 파라미터

    Raises:
        UsageError: 조건이 하나도 없는 경우
    """
    if not conditions:
        raise UsageError("Cannot render a WHERE clause without predicates")

    fragments = []
    params: List[Any] = []
    for condition in conditions:
        fragment, values = condition.to_sql()
        fragments.append(fragment)
        params.extend(values)

    return " AND ".join(fragments), params
