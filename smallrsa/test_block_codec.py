import pytest
from sympy import prevprime

from smallrsa.block_codec import (
    ALPHABET,
    compute_block_size,
    decode,
    encode,
    sign,
    signature_matches,
    verify,
)
from smallrsa.errors import InvalidInputError
from smallrsa.keygen import PRIME_LIMIT, generate_key_pair, key_pair_from_primes

# n = 61 * 53
N, E, D = 3233, 17, 2753


@pytest.mark.parametrize("n, width", [
    (24, 0),
    (25, 2),
    (26, 2),
    (2524, 2),
    (2525, 4),
    (2537, 4),
    (3233, 4),
    (252525, 6),
    (2_999_971_984, 10),
])
def test_compute_block_size(n, width):
    assert compute_block_size(n) == width


def test_encode_zero_block():
    assert encode(2537, 13, "AA") == "0000 "
    assert decode(2537, 937, "0000 ") == "AA"


def test_encode_pads_short_block_with_x():
    encoded = encode(2537, 13, "A")
    assert encoded == f"{pow(23, 13, 2537):04d} "
    assert decode(2537, 937, encoded) == "AX"


def test_encode_blocks():
    expected = [f"{pow(block, E, N):04d}" for block in (704, 1111, 1423)]
    encoded = encode(N, E, "HELLO")
    assert encoded == " ".join(expected) + " "
    assert encoded.split() == expected


def test_decode_restores_padding_letters():
    assert decode(N, D, encode(N, E, "HELLO")) == "HELLOX"
    assert decode(N, D, encode(N, E, "HELL")) == "HELL"


def test_decode_accepts_text_without_spaces():
    encoded = encode(N, E, "ATTACKATDAWN")
    assert decode(N, D, encoded.replace(" ", "")) == "ATTACKATDAWN"


def test_empty_message():
    assert encode(N, E, "") == ""
    assert decode(N, D, "") == ""


def test_whole_alphabet_round_trip():
    assert decode(N, D, encode(N, E, ALPHABET)) == ALPHABET


def test_round_trip_at_the_largest_modulus():
    p = int(prevprime(PRIME_LIMIT + 1))
    n, e, d = key_pair_from_primes(p, int(prevprime(p)))
    message = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG"
    encoded = encode(n, e, message)
    assert all(len(block) == 10 for block in encoded.split())
    assert decode(n, d, encoded) == message


def test_round_trip_with_generated_key():
    n, e, d = generate_key_pair()
    letters_per_block = compute_block_size(n) // 2
    for message in ("A", "Z", "ZZZZZZZZZZ", "CRYPTOGRAPHY", ALPHABET):
        decoded = decode(n, d, encode(n, e, message))
        assert decoded.startswith(message)
        assert set(decoded[len(message):]) <= {"X"}
        assert len(decoded) % letters_per_block == 0


@pytest.mark.parametrize("message", ["hello", "HELLO WORLD", "ÁB", "A1"])
def test_encode_rejects_characters_outside_alphabet(message):
    with pytest.raises(InvalidInputError):
        encode(N, E, message)


@pytest.mark.parametrize("encoded", ["123", "12345", "0704 11a1", "0704-1111"])
def test_decode_rejects_malformed_text(encoded):
    with pytest.raises(InvalidInputError):
        decode(N, D, encoded)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        decode(N, D, "123")


def test_key_checks():
    with pytest.raises(InvalidInputError):
        encode(25, 3, "A")
    with pytest.raises(InvalidInputError):
        encode(N, 0, "A")
    with pytest.raises(InvalidInputError):
        decode(N, 0, "0000")


def test_sign_and_verify():
    signature = sign(N, D, "HELLO")
    assert signature == encode(N, D, "HELLO")
    assert verify(N, E, signature) == "HELLOX"
    assert signature_matches(N, E, signature, "HELLO")
    assert signature_matches(N, E, signature, "HELLOX")


def test_signature_matches_rejects_other_messages():
    signature = sign(N, D, "HELLO")
    assert not signature_matches(N, E, signature, "HELLP")
    assert not signature_matches(N, E, signature, "HELL")
    assert not signature_matches(N, E, "123", "HELLO")
