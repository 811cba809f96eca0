import pytest

from modules.core.pagination import DEFAULT_LIMIT, MAX_LIMIT, _parse_clamped

pytestmark = pytest.mark.unit


class TestParseClamped:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, 1),
            ("", 1),
            ("abc", 1),
            ("0", 1),
            ("-5", 1),
            ("3", 3),
            (" 4 ", 4),
        ],
    )
    def test_page(self, raw, expected):
        assert _parse_clamped(raw, 1) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, DEFAULT_LIMIT),
            ("x", DEFAULT_LIMIT),
            ("0", DEFAULT_LIMIT),
            ("-1", 1),
            ("25", 25),
            ("1000", MAX_LIMIT),
        ],
    )
    def test_limit(self, raw, expected):
        assert _parse_clamped(raw, DEFAULT_LIMIT, upper=MAX_LIMIT) == expected
