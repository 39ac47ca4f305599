"""
데이터베이스 연결 관리 모듈
- Context Manager를 활용한 자동 연결 관리
- 호출 1회당 연결 1개 (획득 -> 사용 -> 반드시 반환)
- 기본 드라이버는 pyodbc, DB-API 2.0 qmark 드라이버로 교체 가능
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Generator, Optional

from .config import DB_CONFIG, get_connection_string
from .exceptions import BaseRecordError, DatabaseConnectionError, DataAccessError

logger = logging.getLogger(__name__)

# 사용자 지정 연결 생성 함수 (None이면 pyodbc 사용)
_connection_factory: Optional[Callable[[], Any]] = None


def set_connection_factory(factory: Optional[Callable[[], Any]]) -> None:
    """
    연결 생성 함수 지정

    Args:
        factory: 인자 없이 DB-API 2.0 Connection을 반환하는 함수
                 None이면 기본 pyodbc 연결로 복원

    Example:
        set_connection_factory(lambda: sqlite3.connect("app.db"))
    """
    global _connection_factory
    _connection_factory = factory


def _pyodbc_connect():
    import pyodbc

    return pyodbc.connect(get_connection_string(), timeout=DB_CONFIG['timeout'])


def get_db_connection():
    """
    DB 연결 반환

    Returns:
        DB-API 2.0 Connection 객체

    Raises:
        DatabaseConnectionError: 연결 실패 시 (재시도하지 않음)
    """
    factory = _connection_factory or _pyodbc_connect
    try:
        return factory()
    except Exception as e:
        logger.warning(f"[DB] 연결 실패: {e}")
        raise DatabaseConnectionError(f"Failed to open database connection: {e}") from e


@contextmanager
def get_db_cursor(commit: bool = True, sql: Optional[str] = None) -> Generator:
    """
    DB 커서를 자동으로 관리하는 Context Manager

    Args:
        commit: True일 경우 자동 커밋, False일 경우 커밋하지 않음
        sql: 오류 메시지에 포함할 SQL (선택)

    Yields:
        DB-API Cursor

    Raises:
        DataAccessError: 드라이버가 발생시킨 오류 (롤백 후 전파)

    Example:
        with get_db_cursor() as cursor:
            cursor.execute("SELECT * FROM users WHERE id = ?", [1])
            data = cursor.fetchall()
    """
    conn = get_db_connection()
    cursor = None
    try:
        cursor = conn.cursor()
        yield cursor
        if commit:
            conn.commit()
    except BaseRecordError:
        conn.rollback()
        raise
    except Exception as e:
        logger.error(f"[DB] 쿼리 실패, 롤백: {e}")
        conn.rollback()
        raise DataAccessError(str(e), sql=sql, details={"driver_error": type(e).__name__}) from e
    finally:
        if cursor is not None:
            cursor.close()
        conn.close()


def test_connection():
    """데이터베이스 연결 테스트"""
    try:
        with get_db_cursor(commit=False) as cursor:
            cursor.execute("SELECT 1")
            value = cursor.fetchone()[0]
            return True, str(value)
    except Exception as e:
        return False, str(e)
