import pytest
from fastapi import HTTPException

from auth.dependencies import extract_bearer_token


@pytest.mark.parametrize("header,expected", [
    ("Bearer abc.def.ghi", "abc.def.ghi"),
    ("bearer abc.def.ghi", "abc.def.ghi"),
    ("BEARER abc.def.ghi", "abc.def.ghi"),
    ("Bearer   abc.def.ghi  ", "abc.def.ghi"),
    ("Bearer ", ""),
])
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


@pytest.mark.parametrize("header", [None, "", "abc.def.ghi", "Basic dXNlcjpwdw==", "Bearer", "Bearerabc.def.ghi", "Token abc"])
def test_extract_bearer_token_rejects(header):
    with pytest.raises(HTTPException) as exc:
        extract_bearer_token(header)
    assert exc.value.status_code == 401
    assert exc.value.headers == {"WWW-Authenticate": "Bearer"}
    assert exc.value.detail == "Not authenticated"
