from __future__ import annotations

import pytest

from app.custom_ids import ComponentAction, CustomId, InvalidCustomIdError


def test_custom_id_encoding_is_deterministic() -> None:
    cid = CustomId(action=ComponentAction.accept, session_id="1234567890")
    assert cid.encode() == "accept:1234567890"
    assert CustomId.decode(cid.encode()) == cid


def test_session_id_may_contain_separator() -> None:
    cid = CustomId.decode("choice:abc:def")
    assert cid.action == ComponentAction.choice
    assert cid.session_id == "abc:def"


@pytest.mark.parametrize("raw", [None, "", "accept", "accept:", "accept_button_123", "reject:123"])
def test_decode_rejects_malformed_ids(raw: str | None) -> None:
    with pytest.raises(InvalidCustomIdError):
        CustomId.decode(raw)


def test_encode_enforces_platform_length_limit() -> None:
    with pytest.raises(InvalidCustomIdError):
        CustomId(action=ComponentAction.choice, session_id="x" * 100).encode()
