"""
Builder for Okta ``filter`` query expressions.

Example::

    FilterBuilder().where("status").equal_to("ACTIVE").and_()
        .where("lastUpdated").greater_than(datetime(2024, 1, 1, tzinfo=timezone.utc))

renders ``status eq "ACTIVE" and lastUpdated gt "2024-01-01T00:00:00.000Z"``.
"""

from datetime import datetime, timezone

FilterValue = str | bool | int | datetime

EQUAL = " eq "
CONTAINS = " co "
STARTS_WITH = " sw "
PRESENT = " pr"
GREATER_THAN = " gt "
GREATER_THAN_OR_EQUAL = " ge "
LESS_THAN = " lt "
LESS_THAN_OR_EQUAL = " le "

AND = " and "
OR = " or "


class Filters:
    """Attribute names commonly used in Okta filter expressions."""

    class User:
        ID = "id"
        STATUS = "status"
        LAST_UPDATED = "lastUpdated"
        LOGIN = "profile.login"
        EMAIL = "profile.email"
        FIRST_NAME = "profile.firstName"
        LAST_NAME = "profile.lastName"

    class Group:
        ID = "id"
        TYPE = "type"
        LAST_UPDATED = "lastUpdated"
        LAST_MEMBERSHIP_UPDATED = "lastMembershipUpdated"

    class App:
        STATUS = "status"
        USER_ID = "user.id"
        GROUP_ID = "group.id"

    class Log:
        EVENT_TYPE = "eventType"
        ACTOR_ID = "actor.id"
        TARGET_ID = "target.id"
        OUTCOME_RESULT = "outcome.result"


def format_datetime(value: datetime) -> str:
    """Render a datetime as ISO-8601 with milliseconds; naive values are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    rendered = value.isoformat(timespec="milliseconds")
    if rendered.endswith("+00:00"):
        rendered = rendered[: -len("+00:00")] + "Z"
    return rendered


def _as_text(value: FilterValue) -> str:
    """Text form of an operand, without quoting."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, datetime):
        return format_datetime(value)
    return str(value)


def format_value(value: FilterValue) -> str:
    """Render a filter operand the way the Okta API expects it."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, datetime):
        return f'"{format_datetime(value)}"'
    return f'"{value}"'


class FilterBuilder:
    """Fluent builder producing an Okta filter expression string."""

    def __init__(self, expression: str = "") -> None:
        self._parts: list[str] = [expression] if expression else []

    def __str__(self) -> str:
        return "".join(self._parts)

    def __repr__(self) -> str:
        return f"FilterBuilder({str(self)!r})"

    def _append(self, text: str) -> "FilterBuilder":
        self._parts.append(text)
        return self

    def where(self, attr: "str | FilterBuilder") -> "FilterBuilder":
        """Start a comparison on ``attr``, or append a parenthesised group."""
        if isinstance(attr, FilterBuilder):
            return self._append(f"({attr})")
        return self.attr(attr)

    def attr(self, attr: str) -> "FilterBuilder":
        return self._append(attr)

    def value(self, value: FilterValue) -> "FilterBuilder":
        return self._append(format_value(value))

    def equal_to(self, value: FilterValue) -> "FilterBuilder":
        return self._append(EQUAL).value(value)

    def contains(self, value: str | int) -> "FilterBuilder":
        return self._append(CONTAINS).value(value)

    def starts_with(self, value: str | int) -> "FilterBuilder":
        return self._append(STARTS_WITH).value(value)

    def present(self, attr: str | None = None) -> "FilterBuilder":
        if attr is not None:
            self.attr(attr)
        return self._append(PRESENT)

    def greater_than(self, value: str | int | datetime) -> "FilterBuilder":
        return self._append(GREATER_THAN).value(value)

    def greater_than_or_equal(self, value: str | int | datetime) -> "FilterBuilder":
        return self._append(GREATER_THAN_OR_EQUAL).value(value)

    def less_than(self, value: str | int | datetime) -> "FilterBuilder":
        return self._append(LESS_THAN).value(value)

    def less_than_or_equal(self, value: str | int | datetime) -> "FilterBuilder":
        return self._append(LESS_THAN_OR_EQUAL).value(value)

    def and_(self, group: "FilterBuilder | None" = None) -> "FilterBuilder":
        self._append(AND)
        return self.where(group) if group is not None else self

    def or_(self, group: "FilterBuilder | None" = None) -> "FilterBuilder":
        self._append(OR)
        return self.where(group) if group is not None else self


def get_filter(name: str, *values: FilterValue) -> FilterBuilder:
    """Build ``name eq "v1" or name eq "v2" ...``; every value is quoted."""
    builder = FilterBuilder()
    for index, value in enumerate(values):
        builder.where(name).equal_to(_as_text(value))
        if index != len(values) - 1:
            builder.or_()
    return builder
