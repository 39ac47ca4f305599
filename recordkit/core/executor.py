"""
쿼리 실행 모듈
- 호출 1회당 연결 1개, 쿼리 1개 실행
- 조회 결과 -> 대상 타입 변환
- 변경 쿼리 -> 영향받은 행 수 / 생성된 키
"""

import logging
from typing import Any, List, Optional, Sequence

from .config import RECORD_CONFIG
from .database import get_db_cursor
from .decorators import log_execution_time
from .mapper import row_to_object
from .models import ResultKey

logger = logging.getLogger(__name__)


def _execute(cursor, sql: str, params: Sequence[Any]) -> None:
    # 바인딩 값은 기록하지 않음 (개수만)
    logger.debug(f"[SQL] {sql} | {len(params)} param(s)")
    cursor.execute(sql, list(params))


def _fetch_identity(cursor, identity_query: str) -> Optional[Any]:
    """
    생성 키 조회

    조회 실패는 INSERT 결과에 영향을 주지 않는다 (경고 후 None 반환).
    """
    try:
        cursor.execute(identity_query)
        row = cursor.fetchone()
    except Exception as e:
        logger.warning(f"[SQL] 생성 키 조회 실패 ({identity_query}): {e}")
        return None
    return row[0] if row else None


def _column_names(cursor) -> List[str]:
    return [column[0] for column in (cursor.description or ())]


@log_execution_time
def fetch_all(target: type, sql: str, params: Sequence[Any] = ()) -> List[Any]:
    """
    조회 쿼리 실행 후 전체 Row 변환

    Args:
        target: 변환 대상 타입
        sql: SQL 쿼리
        params: 바인딩 파라미터 (순서대로)

    Returns:
        List: 변환된 객체 리스트
    """
    with get_db_cursor(commit=False, sql=sql) as cursor:
        _execute(cursor, sql, params)
        columns = _column_names(cursor)
        return [row_to_object(target, columns, row) for row in cursor.fetchall()]


@log_execution_time
def fetch_first(target: type, sql: str, params: Sequence[Any] = ()) -> Optional[Any]:
    """조회 쿼리 실행 후 첫 번째 Row 변환 (없으면 None)"""
    with get_db_cursor(commit=False, sql=sql) as cursor:
        _execute(cursor, sql, params)
        row = cursor.fetchone()
        return row_to_object(target, _column_names(cursor), row) if row else None


@log_execution_time
def fetch_scalar(sql: str, params: Sequence[Any] = ()) -> Any:
    """첫 번째 Row의 첫 번째 컬럼 반환 (COUNT 등)"""
    with get_db_cursor(commit=False, sql=sql) as cursor:
        _execute(cursor, sql, params)
        row = cursor.fetchone()
        return row[0] if row else None


@log_execution_time
def execute_update(sql: str, params: Sequence[Any] = ()) -> int:
    """
    변경 쿼리 실행 (UPDATE / DELETE / 기타 DML)

    Returns:
        int: 영향받은 행 수
    """
    with get_db_cursor(sql=sql) as cursor:
        _execute(cursor, sql, params)
        return cursor.rowcount


@log_execution_time
def execute_insert(sql: str, params: Sequence[Any] = ()) -> ResultKey:
    """
    INSERT 쿼리 실행

    생성된 키는 cursor.lastrowid를 우선 사용하고,
    드라이버가 지원하지 않으면 identity_query 설정으로 조회한다.

    Returns:
        ResultKey: 생성된 키 (없으면 key=None)
    """
    with get_db_cursor(sql=sql) as cursor:
        _execute(cursor, sql, params)

        key = getattr(cursor, "lastrowid", None)
        identity_query = RECORD_CONFIG['identity_query']
        if key is None and identity_query:
            key = _fetch_identity(cursor, identity_query)

        return ResultKey(key=key)
