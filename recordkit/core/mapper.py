"""
엔티티 매핑 모듈
- 엔티티 클래스의 선언된 필드 -> 테이블 컬럼 매핑 (EntityDescriptor)
- 저장 가능한 필드 판별 (지원 타입 / 제외 규칙)
- 인스턴스 -> INSERT 값, 조회 Row -> 인스턴스 변환

지원하는 엔티티 선언 방식:
    - dataclass (컬럼명 지정: field(metadata={"column": "..."}))
    - pydantic BaseModel (컬럼명 지정: Field(alias="..."))
    - 타입 힌트가 있는 일반 클래스 (인자 없는 생성자 필요)

테이블 설정은 클래스 속성으로 지정:
    __table__ = "t_user"   # 생략 시 클래스 이름으로 생성
    __pk__ = "user_id"     # 생략 시 "id"
"""

import dataclasses
import re
import types
from datetime import date, datetime, time
from decimal import Decimal
from functools import lru_cache
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from .config import get_table_prefix
from .exceptions import MappingError

# 매핑 가능한 타입 (타입 이름 소문자 기준)
SUPPORTED_TYPES = frozenset({
    "int", "float", "decimal", "bool", "str", "date", "datetime", "time",
})

# 항상 제외되는 필드 이름
EXCLUDED_FIELD_NAMES = frozenset({"serialVersionUID"})

DEFAULT_PK_NAME = "id"

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')

# 단일 컬럼 조회 결과를 바로 변환하는 타입
_SCALAR_CONVERTERS = (int, float, str, bool, Decimal)
_TEMPORAL_TYPES = (date, datetime, time)


def to_column_name(field_name: str) -> str:
    """
    필드 이름 -> 컬럼 이름 (camelCase -> snake_case)

    >>> to_column_name("userName")
    'user_name'
    >>> to_column_name("created_at")
    'created_at'
    """
    return _CAMEL_BOUNDARY.sub('_', field_name).lower()


def _pluralize(word: str) -> str:
    if re.search(r'[^aeiou]y$', word):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def to_table_name(class_name: str, prefix: str = "") -> str:
    """
    클래스 이름 -> 테이블 이름

    >>> to_table_name("OrderItem")
    'order_items'
    >>> to_table_name("User", "t")
    't_users'
    """
    name = to_column_name(class_name)
    if prefix:
        name = f"{prefix.rstrip('_')}_{name}"
    return _pluralize(name)


def _unwrap_optional(annotation: Any) -> Any:
    """Optional[X] / X | None -> X"""
    if isinstance(annotation, str):
        text = annotation.replace(" ", "")
        if text.startswith("Optional[") and text.endswith("]"):
            return text[len("Optional["):-1]
        if text.endswith("|None"):
            return text[:-len("|None")]
        return text

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _type_name(annotation: Any) -> str:
    annotation = _unwrap_optional(annotation)
    if isinstance(annotation, str):
        # 문자열 힌트 ("datetime.date", "list[int]")
        if "[" in annotation:
            return ""
        return annotation.rsplit(".", 1)[-1].lower()
    # 제네릭 컬렉션 (list[int], Dict[str, Any] ...)
    if get_origin(annotation) is not None:
        return ""
    return getattr(annotation, "__name__", "").lower()


def is_persistable(name: str, annotation: Any) -> bool:
    """
    저장 가능한 필드 여부

    Args:
        name: 필드 이름
        annotation: 선언된 타입

    Returns:
        bool: 이름 규칙을 통과하고 지원 타입이면 True
    """
    if name in EXCLUDED_FIELD_NAMES or name.startswith("_"):
        return False
    return _type_name(annotation) in SUPPORTED_TYPES


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """저장 가능한 필드 하나의 매핑 정보"""
    owner: type
    name: str
    column: str
    type_name: str
    # 생성자에 넘길 키 (pydantic alias 사용 시 alias)
    init_key: str


@dataclasses.dataclass(frozen=True)
class EntityDescriptor:
    """엔티티 타입 -> 테이블 매핑 정보"""
    model_class: type
    table_name: str
    pk_name: str
    fields: Tuple[FieldDescriptor, ...]

    @property
    def pk_field(self) -> Optional[FieldDescriptor]:
        for field in self.fields:
            if field.column == self.pk_name or field.name == self.pk_name:
                return field
        return None

    def field_for_column(self, column: str) -> Optional[FieldDescriptor]:
        """결과 컬럼 이름으로 필드 검색 (대소문자 무시)"""
        lowered = column.lower()
        for field in self.fields:
            if field.column.lower() == lowered:
                return field
        return None


def _declared_fields(model_class: type) -> List[Tuple[str, Any, Optional[str]]]:
    """(필드 이름, 타입, 컬럼 이름 지정값) 목록"""
    try:
        hints = get_type_hints(model_class)
    except (NameError, AttributeError, TypeError):
        # 전방 참조가 해석되지 않으면 선언된 원문 사용
        hints = {}

    if dataclasses.is_dataclass(model_class):
        return [
            (f.name, hints.get(f.name, f.type), f.metadata.get("column"))
            for f in dataclasses.fields(model_class)
        ]

    if issubclass(model_class, BaseModel):
        return [
            (name, info.annotation, info.alias)
            for name, info in model_class.model_fields.items()
        ]

    if not hints:
        hints = dict(getattr(model_class, "__annotations__", {}))
    return [
        (name, hint, None)
        for name, hint in hints.items()
        if hint is not ClassVar and get_origin(hint) is not ClassVar
    ]


def describe(model_class: type) -> EntityDescriptor:
    """
    엔티티 타입의 매핑 정보 반환 (타입 + 테이블 접두사 기준 캐시)

    캐시는 크기 제한이 없고 엔티티 타입을 강하게 참조한다 (clear_descriptor_cache 참고).

    Raises:
        MappingError: 클래스가 아닌 값이 전달된 경우
    """
    if not isinstance(model_class, type):
        raise MappingError(f"Entity type expected, got {model_class!r}")
    return _describe(model_class, get_table_prefix())


def clear_descriptor_cache() -> None:
    """
    매핑 정보 캐시 비우기

    캐시는 describe()에 전달된 엔티티 타입을 프로세스 종료까지 참조한다.
    엔티티 클래스를 런타임에 동적으로 생성하는 경우 주기적으로 호출해야 한다.
    """
    _describe.cache_clear()


@lru_cache(maxsize=None)
def _describe(model_class: type, prefix: str) -> EntityDescriptor:
    table_name = getattr(model_class, "__table__", None) or to_table_name(model_class.__name__, prefix)
    pk_name = getattr(model_class, "__pk__", None) or DEFAULT_PK_NAME
    is_pydantic = issubclass(model_class, BaseModel)

    fields = []
    for name, annotation, column in _declared_fields(model_class):
        if not is_persistable(name, annotation):
            continue
        fields.append(FieldDescriptor(
            owner=model_class,
            name=name,
            column=column or to_column_name(name),
            type_name=_type_name(annotation),
            init_key=column if (is_pydantic and column) else name,
        ))

    return EntityDescriptor(model_class, table_name, pk_name, tuple(fields))


def extract_value(instance: Any, field: FieldDescriptor) -> Any:
    """
    인스턴스에서 필드 값 읽기

    Raises:
        MappingError: 인스턴스 타입이 다르거나 속성에 접근할 수 없는 경우
    """
    if not isinstance(instance, field.owner):
        raise MappingError(
            f"Expected {field.owner.__name__} instance, got {type(instance).__name__}",
            {"field": field.name}
        )
    try:
        return getattr(instance, field.name)
    except AttributeError as e:
        raise MappingError(f"Cannot read field '{field.name}': {e}", {"field": field.name}) from e


def row_to_object(target: type, columns: Sequence[str], row: Sequence[Any]) -> Any:
    """
    조회 Row를 대상 타입으로 변환

    Args:
        target: dict / 스칼라 타입 (int, str ...) / 엔티티 타입
        columns: 결과 컬럼 이름 (cursor.description 순서)
        row: 결과 Row

    Returns:
        변환된 값. 엔티티에 없는 컬럼은 무시하고, 결과에 없는 필드는 기본값 유지
    """
    if target is dict:
        return dict(zip(columns, row))

    if target in _SCALAR_CONVERTERS:
        value = row[0]
        if value is None or isinstance(value, target):
            return value
        try:
            return target(value)
        except (TypeError, ValueError, ArithmeticError) as e:
            raise MappingError(f"Cannot convert {value!r} to {target.__name__}") from e

    if target in _TEMPORAL_TYPES:
        return row[0]

    descriptor = describe(target)
    values: Dict[str, Any] = {}
    for column, value in zip(columns, row):
        field = descriptor.field_for_column(column)
        if field is not None:
            values[field.init_key] = value

    try:
        if dataclasses.is_dataclass(target) or issubclass(target, BaseModel):
            return target(**values)
        instance = target()
        for key, value in values.items():
            setattr(instance, key, value)
        return instance
    except (TypeError, ValueError) as e:
        raise MappingError(
            f"Cannot build {target.__name__} from row: {e}",
            {"columns": list(columns)}
        ) from e
