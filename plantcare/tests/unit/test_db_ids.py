from plantcare.app.db.ids import bin_to_hex, is_hex_id, normalize_user_id


def test_is_hex_id_variants():
    assert is_hex_id(None) is False
    assert is_hex_id("") is False
    assert is_hex_id("abc") is False
    assert is_hex_id("g" * 32) is False
    valid = "0f" * 16
    assert is_hex_id(valid) is True
    assert is_hex_id(valid.upper()) is True
    assert is_hex_id("  " + valid + "  ") is True


def test_normalize_user_id_accepts_dashed_and_plain_uuids():
    assert normalize_user_id(None) is None
    assert normalize_user_id("") is None
    assert normalize_user_id("xyz") is None
    assert normalize_user_id("  " + "AA" * 16 + "  ") == "aa" * 16
    assert normalize_user_id("3F2504E0-4F89-11D3-9A0C-0305E82C3301") == "3f2504e04f8911d39a0c0305e82c3301"


def test_bin_to_hex_round_trips_stored_user_ids():
    valid = "12" * 16
    assert bin_to_hex(bytes.fromhex(valid)) == valid


def test_bin_to_hex_inputs():
    assert bin_to_hex(None) is None
    assert bin_to_hex(b"\x00\x01") == "0001"
    assert bin_to_hex(bytearray(b"\x0a\x0b")) == "0a0b"
