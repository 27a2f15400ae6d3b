"""Tests for opendraw.link_codec."""

import base64
import re

import pytest

from opendraw import link_codec
from opendraw.errors import InvalidOrTamperedLink
from opendraw.link_codec import decode, derive_key, encode, from_base64url, to_base64url


def test_derivation_parameters():
    assert link_codec.SALT == b"segredex-salt"
    assert link_codec.ITERATIONS >= 100_000
    key = derive_key("Ana")
    assert len(key) == 32
    assert derive_key("Ana") == key
    assert derive_key("Beto") != key


def test_round_trip_with_default_iterations():
    token = encode("Beto", "Ana")
    assert decode(token, "Ana") == "Beto"


@pytest.mark.parametrize(
    "receiver, giver",
    [
        ("Beto", "Ana"),
        ("José da Silva", "María-Jesús"),
        ("🎅 Noel", "名前"),
        ("", "Ana"),
        ("x" * 500, "Ana Beatriz Caio"),
    ],
)
def test_round_trip(fast_kdf, receiver, giver):
    assert decode(encode(receiver, giver), giver) == receiver


def test_token_layout(fast_kdf):
    token = encode("Beto", "Ana")
    assert re.fullmatch(r"[A-Za-z0-9_-]+", token)
    raw = from_base64url(token)
    # nonce + ciphertext + tag
    assert len(raw) == 12 + len("Beto") + 16


def test_matches_plain_base64_with_url_alphabet():
    data = bytes(range(256))
    expected = base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
    assert to_base64url(data) == expected
    assert from_base64url(expected) == data


def test_wrong_name_fails(fast_kdf):
    token = encode("Beto", "Ana")
    for other in ["Beto", "ana", "Ana ", "", "Caio"]:
        with pytest.raises(InvalidOrTamperedLink):
            decode(token, other)


def test_every_single_bit_flip_is_rejected(fast_kdf):
    raw = from_base64url(encode("Caio", "Ana"))
    for bit in range(len(raw) * 8):
        tampered = bytearray(raw)
        tampered[bit // 8] ^= 1 << (bit % 8)
        with pytest.raises(InvalidOrTamperedLink):
            decode(to_base64url(bytes(tampered)), "Ana")


def test_text_level_tampering_is_rejected(fast_kdf):
    token = encode("Caio", "Ana")
    for i, char in enumerate(token):
        replacement = "A" if char != "A" else "B"
        with pytest.raises(InvalidOrTamperedLink):
            decode(token[:i] + replacement + token[i + 1 :], "Ana")


@pytest.mark.parametrize("token", ["", "abc", "a", "not base64!", "é" * 40, "AAAA" * 3])
def test_malformed_tokens_rejected(fast_kdf, token):
    with pytest.raises(InvalidOrTamperedLink):
        decode(token, "Ana")


def test_truncated_and_extended_tokens_rejected(fast_kdf):
    token = encode("Caio", "Ana")
    raw = from_base64url(token)
    for candidate in (raw[:-1], raw[:28], raw + b"\x00"):
        with pytest.raises(InvalidOrTamperedLink):
            decode(to_base64url(candidate), "Ana")


def test_fresh_nonce_every_time(fast_kdf):
    first = encode("Beto", "Ana")
    second = encode("Beto", "Ana")
    assert first != second
    assert from_base64url(first)[:12] != from_base64url(second)[:12]
    assert decode(first, "Ana") == "Beto"
    assert decode(second, "Ana") == "Beto"


@pytest.mark.parametrize("kind", ["malformed", "non-canonical", "short", "wrong name"])
def test_every_rejection_derives_the_key_and_logs(monkeypatch, caplog, fast_kdf, kind):
    token = encode("Beto", "Ana")
    giver = "Ana"
    if kind == "malformed":
        token = "not base64!"
    elif kind == "non-canonical":
        # 32 bytes leave two unused low bits in the last symbol
        alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
        token = token[:-1] + alphabet[alphabet.index(token[-1]) | 1]
    elif kind == "short":
        token = to_base64url(b"\x00" * 20)
    else:
        giver = "Beto"

    derived = []
    real_derive = link_codec.derive_key

    def recording(name):
        derived.append(name)
        return real_derive(name)

    monkeypatch.setattr(link_codec, "derive_key", recording)
    caplog.set_level("INFO", logger="opendraw.link_codec")
    with pytest.raises(InvalidOrTamperedLink):
        decode(token, giver)

    assert derived == [giver]
    assert caplog.messages == ["Rejected an invalid or tampered link"]
