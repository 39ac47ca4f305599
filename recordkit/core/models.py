"""
공통 Pydantic 모델
- 실행 결과 타입
"""

from typing import Any, Optional

from pydantic import BaseModel


class ResultKey(BaseModel):
    """INSERT 후 생성된 키 (드라이버에 따라 숫자/문자열/None)"""
    key: Optional[Any] = None

    @property
    def is_empty(self) -> bool:
        return self.key is None

    def as_int(self) -> Optional[int]:
        """정수 키로 변환 (키가 없으면 None)"""
        return None if self.key is None else int(self.key)

    def as_str(self) -> Optional[str]:
        """문자열 키로 변환 (키가 없으면 None)"""
        return None if self.key is None else str(self.key)
