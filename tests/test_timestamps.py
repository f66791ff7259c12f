"""Tests for the timestamps module."""
import pytest
from srtshift.errors import IntegerParseError, MalformedTimestamp, TimestampOverflowError
from srtshift.timestamps import MAX_HOURS, Timestamp


class TestTimestampConstruction:
    """Tests for Timestamp construction and raw access."""

    def test_default_is_zero(self):
        """Test that a default Timestamp is 00:00:00,000."""
        assert Timestamp().get() == (0, 0, 0, 0)

    def test_fields_are_not_normalized(self):
        """Test that out-of-range minutes are kept as given."""
        ts = Timestamp(0, 99, 0, 1500)
        assert ts.get() == (0, 99, 0, 1500)

    def test_storage_width_rejected(self):
        """Test that values that do not fit their storage width are rejected."""
        with pytest.raises(ValueError):
            Timestamp(256, 0, 0, 0)
        with pytest.raises(ValueError):
            Timestamp(0, 0, 0, 65536)
        with pytest.raises(ValueError):
            Timestamp(0, -1, 0, 0)

    def test_set_overwrites_all_fields(self):
        """Test that set replaces every field without normalizing."""
        ts = Timestamp(1, 2, 3, 4)
        ts.set(5, 70, 80, 2000)
        assert ts.get() == (5, 70, 80, 2000)

    def test_set_rejects_storage_overflow(self):
        """Test that set validates storage widths and leaves the value untouched."""
        ts = Timestamp(1, 2, 3, 4)
        with pytest.raises(ValueError):
            ts.set(300, 0, 0, 0)
        assert ts.get() == (1, 2, 3, 4)

    def test_copy_is_independent(self):
        """Test that shifting a copy does not move the original."""
        ts = Timestamp(0, 0, 1, 0)
        other = ts.copy()
        other.add_seconds(5)
        assert ts == Timestamp(0, 0, 1, 0)
        assert other == Timestamp(0, 0, 6, 0)

    def test_to_milliseconds(self):
        """Test total millisecond conversion."""
        assert Timestamp(1, 2, 3, 4).to_milliseconds() == 3_723_004


class TestTimestampParse:
    """Tests for Timestamp.parse."""

    def test_parse_basic(self):
        """Test parsing well-formed timecodes."""
        assert Timestamp.parse("12:35:42,756") == Timestamp(12, 35, 42, 756)
        assert Timestamp.parse("32:00:46,000") == Timestamp(32, 0, 46, 0)

    def test_parse_short_fields(self):
        """Test that fields need not be zero padded."""
        assert Timestamp.parse("1:2:3,4") == Timestamp(1, 2, 3, 4)

    def test_parse_keeps_out_of_range_values(self):
        """Test that semantically invalid minutes are accepted as-is."""
        assert Timestamp.parse("00:99:00,000").get() == (0, 99, 0, 0)

    def test_parse_large_hours(self):
        """Test parsing hours above 99."""
        assert Timestamp.parse("255:00:00,000").hours == 255

    @pytest.mark.parametrize("text", ["00:00:00", "00:00,000", "000", "", "00:00:00.000"])
    def test_parse_missing_field(self, text):
        """Test that a missing field raises MalformedTimestamp."""
        with pytest.raises(MalformedTimestamp):
            Timestamp.parse(text)

    @pytest.mark.parametrize(
        "text",
        [
            "256:00:00,000",
            "00:00:00,65536",
            "aa:00:00,000",
            "00::00,000",
            "00:00:00,",
            "-1:00:00,000",
            " 00:00:00,000",
            "1:2:3:4,5",
        ],
    )
    def test_parse_bad_digits(self, text):
        """Test that invalid or oversized digit runs raise IntegerParseError."""
        with pytest.raises(IntegerParseError):
            Timestamp.parse(text)

    def test_parse_errors_are_value_errors(self):
        """Test that parse errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Timestamp.parse("nonsense")


class TestTimestampRender:
    """Tests for Timestamp rendering."""

    def test_render_zero(self):
        """Test rendering a zero timestamp."""
        assert str(Timestamp(0, 0, 0, 0)) == "00:00:00,000"

    def test_render_padding(self):
        """Test zero padding of every field."""
        assert str(Timestamp(0, 1, 20, 500)) == "00:01:20,500"
        assert Timestamp(1, 2, 3, 4).render() == "01:02:03,004"

    def test_render_wide_hours(self):
        """Test that hours above 99 print wider than two digits."""
        assert str(Timestamp(123, 4, 5, 6)) == "123:04:05,006"

    @pytest.mark.parametrize(
        "fields",
        [(0, 0, 0, 0), (1, 2, 3, 4), (99, 59, 59, 999), (255, 59, 59, 999), (100, 0, 0, 1)],
    )
    def test_round_trip(self, fields):
        """Test that parsing a rendered timestamp gives it back."""
        ts = Timestamp(*fields)
        assert Timestamp.parse(str(ts)) == ts


class TestTimestampCarry:
    """Tests for carry-propagating arithmetic."""

    def test_carry_sequence(self):
        """Test carrying through every unit, forwards and backwards."""
        ts = Timestamp(0, 0, 0, 0)
        ts.add_milliseconds(1200)
        assert ts == Timestamp(0, 0, 1, 200)
        ts.add_seconds(65)
        assert ts == Timestamp(0, 1, 6, 200)
        ts.add_minutes(122)
        assert ts == Timestamp(2, 3, 6, 200)
        ts.add_hours(-1)
        assert ts == Timestamp(1, 3, 6, 200)
        ts.add_seconds(-7)
        assert ts == Timestamp(1, 2, 59, 200)

    def test_negative_millisecond_borrow(self):
        """Test borrowing across several units at once."""
        ts = Timestamp(1, 0, 0, 0)
        ts.add_milliseconds(-1)
        assert ts == Timestamp(0, 59, 59, 999)

    def test_exact_multiple_borrow(self):
        """Test that a delta of exactly one unit borrows exactly once."""
        ts = Timestamp(0, 1, 0, 0)
        ts.add_seconds(-60)
        assert ts == Timestamp(0, 0, 0, 0)

    def test_large_millisecond_delta(self):
        """Test a delta spanning hours."""
        ts = Timestamp(0, 0, 0, 0)
        ts.add_milliseconds(3_723_004)
        assert ts == Timestamp(1, 2, 3, 4)

    def test_shift_normalizes_out_of_range_field(self):
        """Test that a zero shift on a non-normalized field carries the excess."""
        ts = Timestamp(0, 99, 0, 0)
        ts.add_minutes(0)
        assert ts == Timestamp(1, 39, 0, 0)

    def test_add_timestamp(self):
        """Test adding a duration held in another Timestamp."""
        ts = Timestamp(0, 2, 0, 0)
        ts.add(Timestamp(1, 20, 0, 0))
        assert ts == Timestamp(1, 22, 0, 0)

    def test_add_timestamp_with_carry(self):
        """Test that add carries between fields."""
        ts = Timestamp(0, 59, 59, 900)
        ts.add(Timestamp(0, 0, 0, 100))
        assert ts == Timestamp(1, 0, 0, 0)

    def test_sub_timestamp(self):
        """Test subtracting a duration with a borrow."""
        ts = Timestamp(0, 0, 5, 0)
        ts.sub(Timestamp(0, 0, 1, 500))
        assert ts == Timestamp(0, 0, 3, 500)

    def test_add_then_sub_restores(self):
        """Test that add followed by sub returns to the start."""
        ts = Timestamp(3, 14, 15, 926)
        delta = Timestamp(1, 59, 59, 999)
        ts.add(delta)
        ts.sub(delta)
        assert ts == Timestamp(3, 14, 15, 926)


class TestTimestampOverflow:
    """Tests for leaving the representable hour range."""

    def test_overflow_above_max(self):
        """Test that carrying past 255 hours raises."""
        ts = Timestamp(0, 0, 0, 0)
        ts.add_hours(MAX_HOURS)
        with pytest.raises(TimestampOverflowError, match="Surpassed limits of Timestamp"):
            ts.add_minutes(60)

    def test_overflow_below_zero(self):
        """Test that going below zero raises."""
        ts = Timestamp(0, 0, 0, 0)
        with pytest.raises(TimestampOverflowError):
            ts.add_minutes(-10)

    def test_failed_shift_leaves_value_unchanged(self):
        """Test that a carry failure does not touch the lower fields."""
        ts = Timestamp(0, 0, 0, 500)
        with pytest.raises(TimestampOverflowError):
            ts.add_seconds(-1)
        assert ts == Timestamp(0, 0, 0, 500)

    def test_add_keeps_earlier_fields_on_failure(self):
        """Test that add leaves already-applied fields in place."""
        ts = Timestamp(0, 0, 0, 0)
        with pytest.raises(TimestampOverflowError):
            ts.add(Timestamp(255, 60, 0, 0))
        assert ts == Timestamp(255, 0, 0, 0)

    def test_overflow_error_details(self):
        """Test the attributes carried by the overflow error."""
        ts = Timestamp(2, 0, 0, 0)
        with pytest.raises(TimestampOverflowError) as excinfo:
            ts.add_hours(-3)
        assert excinfo.value.hours == 2
        assert excinfo.value.delta == -3
        assert isinstance(excinfo.value, OverflowError)

    def test_max_value_reachable(self):
        """Test that 255:59:59,999 is reachable without error."""
        ts = Timestamp(255, 59, 59, 998)
        ts.add_milliseconds(1)
        assert ts == Timestamp(255, 59, 59, 999)


class TestTimestampOrdering:
    """Tests for Timestamp comparison."""

    def test_lexicographic_order(self):
        """Test that fields are compared from hours down."""
        assert Timestamp(0, 0, 0, 999) < Timestamp(0, 0, 1, 0)
        assert Timestamp(0, 59, 59, 999) < Timestamp(1, 0, 0, 0)
        assert Timestamp(1, 2, 3, 4) == Timestamp(1, 2, 3, 4)
        assert Timestamp(2, 0, 0, 0) > Timestamp(1, 59, 59, 999)

    def test_sorted(self):
        """Test sorting a list of timestamps."""
        values = [Timestamp(0, 1, 0, 0), Timestamp(0, 0, 0, 1), Timestamp(1, 0, 0, 0)]
        assert sorted(values) == [Timestamp(0, 0, 0, 1), Timestamp(0, 1, 0, 0), Timestamp(1, 0, 0, 0)]
