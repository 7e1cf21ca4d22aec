import pytest

from stopwatch.core.formatting import format_time


@pytest.mark.parametrize(
    ("ms", "expected"),
    [
        (0, "00:00:00"),
        (9, "00:00:00"),
        (10, "00:00:01"),
        (1500, "00:01:50"),
        (61005, "01:01:00"),
        (110000, "01:50:00"),
        (3599999, "59:59:99"),
        (3600000, "00:00:00"),
    ],
)
def test_format_time(ms: int, expected: str) -> None:
    assert format_time(ms) == expected


def test_format_time_clamps_negative() -> None:
    assert format_time(-50) == "00:00:00"
