"""
설정 모듈
- .env / 환경 변수에서 DB 연결 정보와 매핑 설정 로드
"""

import os
from dotenv import load_dotenv

# .env 파일에서 환경 변수 로드
load_dotenv()

# 데이터베이스 연결 정보
DB_CONFIG = {
    'server': os.getenv('DB_SERVER'),
    'database': os.getenv('DB_DATABASE'),
    'username': os.getenv('DB_USERNAME'),
    'password': os.getenv('DB_PASSWORD'),
    'driver': os.getenv('DB_DRIVER', '{ODBC Driver 18 for SQL Server}'),
    'connection_string': os.getenv('DB_CONNECTION_STRING'),
    'timeout': int(os.getenv('DB_TIMEOUT', '30')),
}

# 매핑 / 실행 설정
RECORD_CONFIG = {
    # 테이블 이름 접두사 (User -> {prefix}_users)
    'table_prefix': os.getenv('RECORD_TABLE_PREFIX', ''),
    # cursor.lastrowid를 지원하지 않는 드라이버용 생성 키 조회 쿼리
    'identity_query': os.getenv('RECORD_IDENTITY_QUERY', 'SELECT @@IDENTITY'),
}


def get_connection_string() -> str:
    """연결 문자열 생성 (DB_CONNECTION_STRING이 있으면 그대로 사용)"""
    if DB_CONFIG['connection_string']:
        return DB_CONFIG['connection_string']
    return (
        f"DRIVER={DB_CONFIG['driver']};"
        f"SERVER={DB_CONFIG['server']};"
        f"DATABASE={DB_CONFIG['database']};"
        f"UID={DB_CONFIG['username']};"
        f"PWD={DB_CONFIG['password']};"
        f"Encrypt=yes;"
        f"TrustServerCertificate=no;"
    )


def get_table_prefix() -> str:
    return RECORD_CONFIG['table_prefix'] or ''


def set_table_prefix(prefix: str) -> None:
    """테이블 이름 접두사 변경 (이후 생성되는 Record부터 적용)"""
    RECORD_CONFIG['table_prefix'] = prefix or ''
