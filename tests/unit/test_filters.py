"""Tests for the filter expression builder."""

from datetime import datetime, timedelta, timezone

from okta_paging.client.filters import (
    FilterBuilder,
    Filters,
    format_datetime,
    format_value,
    get_filter,
)


class TestFormatting:
    """Test operand rendering."""

    def test_values(self) -> None:
        """Test each operand type renders as Okta expects."""
        assert format_value("ACTIVE") == '"ACTIVE"'
        assert format_value(True) == "true"
        assert format_value(False) == "false"
        assert format_value(42) == "42"

    def test_datetime_with_offset(self) -> None:
        """Test offsets are kept and milliseconds always shown."""
        value = datetime(2014, 1, 1, 1, 1, tzinfo=timezone(timedelta(hours=-8)))

        assert format_datetime(value) == "2014-01-01T01:01:00.000-08:00"

    def test_datetime_utc(self) -> None:
        """Test UTC renders with a Z suffix."""
        value = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)

        assert format_datetime(value) == "2024-05-06T07:08:09.123Z"

    def test_naive_datetime_is_utc(self) -> None:
        """Test naive datetimes are treated as UTC."""
        assert format_datetime(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"


class TestFilterBuilder:
    """Test FilterBuilder expressions."""

    def test_and_expression(self) -> None:
        """Test a status and lastUpdated filter."""
        builder = (
            FilterBuilder()
            .where(Filters.User.STATUS)
            .equal_to("ACTIVE")
            .and_()
            .where(Filters.User.LAST_UPDATED)
            .greater_than(datetime(2014, 1, 1, 1, 1, tzinfo=timezone(timedelta(hours=-8))))
        )

        assert (
            str(builder)
            == 'status eq "ACTIVE" and lastUpdated gt "2014-01-01T01:01:00.000-08:00"'
        )

    def test_or_matches_get_filter(self) -> None:
        """Test get_filter builds the same or-chain as the fluent API."""
        builder = (
            FilterBuilder()
            .where(Filters.User.STATUS)
            .equal_to("LOCKED_OUT")
            .or_()
            .where(Filters.User.STATUS)
            .equal_to("PASSWORD_EXPIRED")
        )

        assert str(builder) == str(
            get_filter(Filters.User.STATUS, "LOCKED_OUT", "PASSWORD_EXPIRED")
        )
        assert str(builder) == 'status eq "LOCKED_OUT" or status eq "PASSWORD_EXPIRED"'

    def test_grouping(self) -> None:
        """Test nested builders are parenthesised."""
        group = get_filter(Filters.User.STATUS, "ACTIVE", "STAGED")
        builder = (
            FilterBuilder()
            .where(Filters.User.LAST_UPDATED)
            .greater_than_or_equal("2024-01-01T00:00:00.000Z")
            .and_(group)
        )

        assert str(builder) == (
            'lastUpdated ge "2024-01-01T00:00:00.000Z" and '
            '(status eq "ACTIVE" or status eq "STAGED")'
        )

    def test_operators(self) -> None:
        """Test the remaining comparison operators."""
        assert str(FilterBuilder().where("profile.email").contains("@example.com")) == (
            'profile.email co "@example.com"'
        )
        assert str(FilterBuilder().where(Filters.User.LOGIN).starts_with("jo")) == (
            'profile.login sw "jo"'
        )
        assert str(FilterBuilder().present(Filters.User.EMAIL)) == "profile.email pr"
        assert str(FilterBuilder().where("count").less_than(5)) == "count lt 5"
        assert str(FilterBuilder().where("count").less_than_or_equal(5)) == "count le 5"
        assert str(FilterBuilder().where("flag").equal_to(True)) == "flag eq true"

    def test_initial_expression(self) -> None:
        """Test a builder can start from raw text."""
        builder = FilterBuilder('type eq "OKTA_GROUP"').and_().where("id").equal_to("00g1")

        assert str(builder) == 'type eq "OKTA_GROUP" and id eq "00g1"'
        assert repr(builder).startswith("FilterBuilder(")

    def test_get_filter_renders_typed_values(self) -> None:
        """Test get_filter quotes bools in lowercase and datetimes as ISO-8601."""
        assert str(get_filter("enabled", True)) == 'enabled eq "true"'
        assert str(
            get_filter(Filters.User.LAST_UPDATED, datetime(2024, 1, 1, tzinfo=timezone.utc))
        ) == 'lastUpdated eq "2024-01-01T00:00:00.000Z"'
        assert str(get_filter("count", 3)) == 'count eq "3"'

    def test_empty_get_filter(self) -> None:
        """Test no values produce an empty expression."""
        assert str(get_filter("status")) == ""
