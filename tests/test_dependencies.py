import pytest

from app.auth import MalformedHeaderError, extract_bearer


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc", "abc"),
        ("  Bearer   abc  ", "abc"),
    ],
)
def test_extract_bearer_accepts_well_formed_header(header, expected):
    assert extract_bearer(header) == expected


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        "   ",
        "Bearer",
        "Bearerabc",
        "abc.def.ghi",
        "Basic dXNlcjpwYXNz",
        "Bearer abc extra",
    ],
)
def test_extract_bearer_rejects_malformed_header(header):
    with pytest.raises(MalformedHeaderError):
        extract_bearer(header)
