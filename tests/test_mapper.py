"""Tests for entity mapping."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Dict, List, Optional

import pytest
from pydantic import BaseModel, Field

from recordkit.core import (
    MappingError,
    clear_descriptor_cache,
    describe,
    extract_value,
    is_persistable,
    row_to_object,
    set_table_prefix,
    to_column_name,
    to_table_name,
)


@dataclass
class UserProfile:
    id: Optional[int] = None
    userName: str = ""
    age: int = 0
    balance: Decimal = Decimal("0")
    birthday: Optional[date] = None
    tags: List[str] = field(default_factory=list)
    _cache: Optional[str] = None
    serialVersionUID: int = 1


@dataclass
class LegacyMember:
    __table__ = "t_member"
    __pk__ = "member_id"

    member_id: Optional[int] = None
    nickname: str = field(default="", metadata={"column": "nick_nm"})


@dataclass
class Strict:
    id: int
    name: str


class Product(BaseModel):
    id: Optional[int] = None
    name: str = ""
    price: float = Field(default=0.0, alias="unit_price")
    meta: Dict[str, str] = {}


class Plain:
    registry: ClassVar[Dict[str, int]] = {}

    id: Optional[int]
    title: str

    def __init__(self):
        self.id = None
        self.title = "untitled"


class TestNaming:
    """Field and table naming."""

    @pytest.mark.parametrize("field_name, column", [
        ("userName", "user_name"),
        ("created_at", "created_at"),
        ("id", "id"),
        ("HTTPStatus", "http_status"),
        ("viewCount2", "view_count2"),
    ])
    def test_to_column_name(self, field_name, column):
        assert to_column_name(field_name) == column

    @pytest.mark.parametrize("class_name, prefix, table", [
        ("User", "", "users"),
        ("OrderItem", "", "order_items"),
        ("Category", "", "categories"),
        ("Address", "", "addresses"),
        ("Day", "", "days"),
        ("User", "t", "t_users"),
        ("User", "t_", "t_users"),
    ])
    def test_to_table_name(self, class_name, prefix, table):
        assert to_table_name(class_name, prefix) == table


class TestPersistable:
    """Supported type allow-list and exclusion rules."""

    @pytest.mark.parametrize("annotation", [
        int, float, bool, str, Decimal, date, datetime, Optional[int], "int", "Optional[str]",
    ])
    def test_supported(self, annotation):
        assert is_persistable("value", annotation)

    @pytest.mark.parametrize("annotation", [
        list, List[int], Dict[str, int], Plain, bytes, "list[int]",
    ])
    def test_unsupported(self, annotation):
        assert not is_persistable("value", annotation)

    def test_private_and_serial_names_excluded(self):
        assert not is_persistable("_cache", str)
        assert not is_persistable("serialVersionUID", int)


class TestDescribe:
    """EntityDescriptor derivation."""

    def test_dataclass_descriptor(self):
        descriptor = describe(UserProfile)

        assert descriptor.table_name == "user_profiles"
        assert descriptor.pk_name == "id"
        assert [f.name for f in descriptor.fields] == ["id", "userName", "age", "balance", "birthday"]
        assert [f.column for f in descriptor.fields] == ["id", "user_name", "age", "balance", "birthday"]
        assert descriptor.pk_field.name == "id"

    def test_table_and_column_overrides(self):
        descriptor = describe(LegacyMember)

        assert descriptor.table_name == "t_member"
        assert descriptor.pk_name == "member_id"
        assert descriptor.pk_field.name == "member_id"
        assert descriptor.field_for_column("NICK_NM").name == "nickname"

    def test_pydantic_descriptor_uses_alias(self):
        descriptor = describe(Product)

        assert descriptor.table_name == "products"
        assert [f.column for f in descriptor.fields] == ["id", "name", "unit_price"]

    def test_plain_class_skips_class_vars(self):
        descriptor = describe(Plain)

        assert descriptor.table_name == "plains"
        assert [f.name for f in descriptor.fields] == ["id", "title"]

    def test_table_prefix(self):
        set_table_prefix("app")

        assert describe(UserProfile).table_name == "app_user_profiles"
        assert describe(LegacyMember).table_name == "t_member"

    def test_non_type_raises(self):
        with pytest.raises(MappingError):
            describe(UserProfile())

    def test_descriptor_cache(self):
        first = describe(UserProfile)

        assert describe(UserProfile) is first

        clear_descriptor_cache()

        assert describe(UserProfile) is not first
        assert describe(UserProfile) == first


class TestExtractValue:
    """Reading field values from instances."""

    def test_reads_value(self):
        profile = UserProfile(userName="jack")
        name_field = describe(UserProfile).field_for_column("user_name")

        assert extract_value(profile, name_field) == "jack"

    def test_wrong_instance_type_raises(self):
        name_field = describe(UserProfile).field_for_column("user_name")

        with pytest.raises(MappingError, match="Expected UserProfile"):
            extract_value(LegacyMember(), name_field)

    def test_missing_attribute_raises(self):
        plain = Plain()
        del plain.title
        title_field = describe(Plain).field_for_column("title")

        with pytest.raises(MappingError, match="Cannot read field"):
            extract_value(plain, title_field)


class TestRowToObject:
    """Mapping result rows onto targets."""

    def test_dataclass_ignores_unknown_columns(self):
        profile = row_to_object(UserProfile, ["id", "user_name", "unknown"], (3, "jack", "x"))

        assert profile.id == 3
        assert profile.userName == "jack"
        assert profile.age == 0
        assert profile.tags == []

    def test_pydantic_alias_column(self):
        product = row_to_object(Product, ["id", "name", "unit_price"], (1, "pen", 1.5))

        assert product == Product(id=1, name="pen", unit_price=1.5)

    def test_plain_class(self):
        plain = row_to_object(Plain, ["title"], ("hello",))

        assert plain.id is None
        assert plain.title == "hello"

    def test_dict_target(self):
        assert row_to_object(dict, ["id", "name"], (1, "jack")) == {"id": 1, "name": "jack"}

    def test_scalar_target(self):
        assert row_to_object(int, ["total"], ("5",)) == 5
        assert row_to_object(str, ["name"], (None,)) is None

    def test_scalar_conversion_failure_raises(self):
        with pytest.raises(MappingError, match="Cannot convert"):
            row_to_object(int, ["total"], ("abc",))

    def test_missing_required_field_raises(self):
        with pytest.raises(MappingError, match="Cannot build Strict"):
            row_to_object(Strict, ["id"], (1,))
