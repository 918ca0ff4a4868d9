import pytest

from ds_common.config.env import parse_bool_env, parse_int_env

pytestmark = pytest.mark.unit_common


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("on", True), ("0", False), ("nope", False), (None, None)],
)
def test_parse_bool_env(raw, expected) -> None:
    assert parse_bool_env(raw) is expected


def test_parse_int_env() -> None:
    assert parse_int_env("12") == 12
    assert parse_int_env("twelve") is None
    assert parse_int_env(None) is None
