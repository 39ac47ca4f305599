"""
recordkit - ActiveRecord 스타일 SQL 빌더

Quick Start:
    >>> from dataclasses import dataclass
    >>> from typing import Optional
    >>> from recordkit import Record, set_connection_factory
    >>>
    >>> @dataclass
    ... class User:
    ...     id: Optional[int] = None
    ...     name: str = ""
    ...     age: int = 0
    >>>
    >>> Record(User).where("age > ?", 18).order("id DESC").all()
"""

from .core import (
    ActiveRecord,
    BaseRecordError,
    DataAccessError,
    DatabaseConnectionError,
    MappingError,
    QueryBuilder,
    Record,
    ResultKey,
    Statement,
    UsageError,
    set_connection_factory,
    set_table_prefix,
)

__version__ = "0.1.0"

__all__ = [
    'ActiveRecord',
    'BaseRecordError',
    'DataAccessError',
    'DatabaseConnectionError',
    'MappingError',
    'QueryBuilder',
    'Record',
    'ResultKey',
    'Statement',
    'UsageError',
    'set_connection_factory',
    'set_table_prefix',
]
