"""
데코레이터 모듈
- 종료 연산 후 빌더 상태 초기화
- 실행 시간 로깅
"""

import logging
import time
from functools import wraps
from typing import Callable

# 로거 설정
logger = logging.getLogger(__name__)


def terminal(func: Callable) -> Callable:
    """
    종료 연산 데코레이터

    성공/실패와 관계없이 메서드 종료 시 self.reset() 호출.
    누적된 조건이 다음 호출로 넘어가지 않는다.

    사용 예시:
    ```python
    class Record(QueryBuilder):
        @terminal
        def count(self) -> int:
            ...
    ```
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        finally:
            self.reset()
    return wrapper


def log_execution_time(func: Callable) -> Callable:
    """
    실행 시간 로깅 데코레이터 (DEBUG 레벨)

    사용 예시:
    ```python
    @log_execution_time
    def fetch_all(target, sql, params):
        # 실행 시간이 로그에 기록됨
        ...
    ```
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            execution_time = time.perf_counter() - start_time
            logger.debug(f"{func.__name__} executed in {execution_time:.4f} seconds")

    return wrapper
