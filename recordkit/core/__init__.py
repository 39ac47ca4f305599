"""Core 모듈"""

from .config import DB_CONFIG, RECORD_CONFIG, get_connection_string, get_table_prefix, set_table_prefix
from .database import get_db_connection, get_db_cursor, set_connection_factory, test_connection
from .filter_builder import FilterCondition, FilterOperator
from .query_builder import (
    QueryBuilder, Statement, build_insert_query, build_update_query, build_delete_query
)
from .mapper import (
    EntityDescriptor, FieldDescriptor, SUPPORTED_TYPES,
    clear_descriptor_cache, describe, extract_value, is_persistable, row_to_object, to_column_name, to_table_name
)
from .models import ResultKey
from .record import Record
from .active_record import ActiveRecord
from .decorators import terminal, log_execution_time
from .exceptions import (
    BaseRecordError, UsageError, MappingError, DataAccessError, DatabaseConnectionError,
    ErrorCode, get_error_code, get_error_response
)

__all__ = [
    # Config
    'DB_CONFIG',
    'RECORD_CONFIG',
    'get_connection_string',
    'get_table_prefix',
    'set_table_prefix',
    # Database
    'get_db_connection',
    'get_db_cursor',
    'set_connection_factory',
    'test_connection',
    # Query Builder
    'FilterCondition',
    'FilterOperator',
    'QueryBuilder',
    'Statement',
    'build_insert_query',
    'build_update_query',
    'build_delete_query',
    # Mapping
    'EntityDescriptor',
    'FieldDescriptor',
    'SUPPORTED_TYPES',
    'clear_descriptor_cache',
    'describe',
    'extract_value',
    'is_persistable',
    'row_to_object',
    'to_column_name',
    'to_table_name',
    # Record
    'ResultKey',
    'Record',
    'ActiveRecord',
    # Decorators
    'terminal',
    'log_execution_time',
    # Exceptions
    'BaseRecordError',
    'UsageError',
    'MappingError',
    'DataAccessError',
    'DatabaseConnectionError',
    'ErrorCode',
    'get_error_code',
    'get_error_response',
]
