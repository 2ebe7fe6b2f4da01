"""Unit tests for UTC-offset parsing and local clock derivation."""

import pytest

from app.utils.clock import (
    derive_local_time,
    format_epoch_ms,
    parse_utc_offset,
    utc_date,
)
from tests.conftest import epoch_ms

HOUR_MS = 60 * 60 * 1000


class TestParseUtcOffset:
    def test_positive_offset(self) -> None:
        assert parse_utc_offset("+07:00") == 7 * HOUR_MS

    def test_negative_offset_with_minutes(self) -> None:
        assert parse_utc_offset("-05:30") == -(5 * HOUR_MS + 30 * 60_000)

    def test_zero_offset(self) -> None:
        assert parse_utc_offset("+00:00") == 0
        assert parse_utc_offset("-00:00") == 0

    def test_quarter_hour_offset(self) -> None:
        assert parse_utc_offset("+05:45") == 5 * HOUR_MS + 45 * 60_000

    @pytest.mark.parametrize(
        "raw",
        ["", "07:00", "+7:00", "+0700", "+07:0", "UTC+07:00", "+07:00:00", "+aa:bb", "+24:00", "+07:60"],
    )
    def test_malformed_offset_rejected(self, raw: str) -> None:
        with pytest.raises(ValueError):
            parse_utc_offset(raw)


class TestFormatting:
    def test_format_epoch_ms(self) -> None:
        assert format_epoch_ms(epoch_ms(2024, 3, 15, 19, 0, 0) + 123) == "2024-03-15T19:00:00.123Z"

    def test_utc_date(self) -> None:
        assert utc_date(epoch_ms(2024, 3, 15, 23, 59, 59)) == "2024-03-15"
        assert utc_date(epoch_ms(2024, 3, 16, 0, 0, 1)) == "2024-03-16"


class TestDeriveLocalTime:
    """Local wall-clock time is UTC now shifted by the offset."""

    T = epoch_ms(2024, 3, 15, 12, 0, 0)

    def test_plus_seven(self) -> None:
        result = derive_local_time("+07:00", self.T)
        assert result.timestamp == self.T + 7 * HOUR_MS
        assert result.formatted == "2024-03-15T19:00:00.000Z"
        assert result.utc_offset == "+07:00"

    def test_minus_five_thirty(self) -> None:
        result = derive_local_time("-05:30", self.T)
        assert result.timestamp == self.T - (5 * HOUR_MS + 30 * 60_000)
        assert result.formatted == "2024-03-15T06:30:00.000Z"

    def test_crosses_date_boundary(self) -> None:
        result = derive_local_time("+14:00", epoch_ms(2024, 3, 15, 23, 0, 0))
        assert result.formatted == "2024-03-16T13:00:00.000Z"

    def test_offset_echoed_in_wire_format(self) -> None:
        result = derive_local_time("+03:00", self.T)
        assert result.model_dump(by_alias=True)["utcOffset"] == "+03:00"

    def test_defaults_to_system_clock(self) -> None:
        result = derive_local_time("+00:00")
        assert result.timestamp > epoch_ms(2024, 1, 1)

    def test_malformed_offset_raises(self) -> None:
        with pytest.raises(ValueError):
            derive_local_time("garbage", self.T)
