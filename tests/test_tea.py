import pytest

from hanabot.plugins.tea import TEA, key_from_text


def test_short_key_padding():
    assert key_from_text("a").key == (97, 3, 2, 1)


def test_long_key_truncated():
    assert key_from_text("abcdef").key == tuple(ord(c) for c in "abcd")


def test_empty_key_padding():
    assert key_from_text("").key == (4, 3, 2, 1)


@pytest.mark.parametrize("n", range(0, 25))
def test_round_trip(n):
    cipher = key_from_text("钥匙")
    data = bytes((i * 13) % 256 for i in range(n))
    encrypted = cipher.encrypt(data)
    assert len(encrypted) % 8 == 0
    assert len(encrypted) >= 16
    assert cipher.decrypt(encrypted) == data


def test_random_padding_still_decrypts():
    cipher = TEA((1, 2, 3, 4))
    a = cipher.encrypt(b"hello")
    b = cipher.encrypt(b"hello")
    assert cipher.decrypt(a) == cipher.decrypt(b) == b"hello"


def test_bad_length():
    with pytest.raises(ValueError):
        TEA((1, 2, 3, 4)).decrypt(b"\x00" * 12)


def test_not_multiple_of_eight():
    with pytest.raises(ValueError):
        TEA((1, 2, 3, 4)).decrypt(b"\x00" * 17)


def test_key_needs_four_words():
    with pytest.raises(ValueError):
        TEA((1, 2, 3))