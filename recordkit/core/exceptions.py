"""
커스텀 예외 클래스
- 표준화된 에러 처리
- 명확한 에러 타입 분류 (사용 오류 / 매핑 오류 / DB 접근 오류)
"""

from typing import Optional


class BaseRecordError(Exception):
    """recordkit 베이스 예외"""
    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class UsageError(BaseRecordError):
    """빌더 API 사용 규칙 위반 (select 중복 호출, 빈 UPDATE 등)"""
    pass


class MappingError(BaseRecordError):
    """필드 접근 / Row -> 객체 변환 실패"""
    pass


class DataAccessError(BaseRecordError):
    """DB 드라이버가 보고한 모든 오류 (잘못된 SQL, 제약 조건 위반, 연결 끊김)"""
    def __init__(self, message: str, sql: Optional[str] = None, details: Optional[dict] = None):
        details = dict(details or {})
        if sql is not None:
            details["sql"] = sql
        super().__init__(message, details)
        self.sql = sql


class DatabaseConnectionError(DataAccessError):
    """데이터베이스 연결 오류"""
    pass


# 에러 코드 상수
class ErrorCode:
    """표준화된 에러 코드"""

    # 일반 에러 (1xxx)
    UNKNOWN_ERROR = 1000

    # 사용 에러 (2xxx)
    USAGE_ERROR = 2000

    # 매핑 에러 (3xxx)
    MAPPING_ERROR = 3000

    # DB 에러 (4xxx)
    DB_QUERY_FAILED = 4000
    DB_CONNECTION_FAILED = 4001


_ERROR_CODES = {
    DatabaseConnectionError: ErrorCode.DB_CONNECTION_FAILED,
    DataAccessError: ErrorCode.DB_QUERY_FAILED,
    MappingError: ErrorCode.MAPPING_ERROR,
    UsageError: ErrorCode.USAGE_ERROR,
}


def get_error_code(exception: Exception) -> int:
    """예외 타입에 해당하는 에러 코드 반환 (하위 클래스 우선)"""
    for error_type in type(exception).__mro__:
        if error_type in _ERROR_CODES:
            return _ERROR_CODES[error_type]
    return ErrorCode.UNKNOWN_ERROR


def get_error_response(exception: Exception) -> dict:
    """
    예외를 표준화된 에러 응답으로 변환

    Args:
        exception: 발생한 예외

    Returns:
        dict: 표준화된 에러 응답
    """
    if isinstance(exception, BaseRecordError):
        return {
            "error": True,
            "code": get_error_code(exception),
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__
        }

    # 일반 예외
    return {
        "error": True,
        "code": ErrorCode.UNKNOWN_ERROR,
        "message": str(exception),
        "details": {},
        "type": "Exception"
    }
