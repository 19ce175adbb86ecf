import pytest

from linch.utils import parse_duration


@pytest.mark.parametrize('text,expected', [
    ('3s', 3.0),
    ('250ms', 0.25),
    ('1m30s', 90.0),
    ('1.5s', 1.5),
    ('2h', 7200.0),
    ('0', 0.0),
    ('4', 4.0),
    ('0.5', 0.5),
])
def test_parse_duration(text, expected):
    assert parse_duration(text) == pytest.approx(expected)


@pytest.mark.parametrize('text', ['', 'fast', '3x', 's', '1m 30s', '10ms5'])
def test_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)
