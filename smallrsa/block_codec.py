"""
Block codec: text <-> numeric blocks <-> RSA-transformed blocks.

Each letter becomes its two-digit index in ALPHABET. The digit string is cut
into blocks of compute_block_size(n) digits, so every block value stays
below the modulus. Every transformed block is printed with digit_count(n)
digits, which lets the decoder re-split text with the spaces removed.
"""
import string
from logging import debug
from typing import List

from smallrsa.errors import InvalidInputError
from smallrsa.keygen import MIN_MODULUS
from smallrsa.modular import digit_count, mod_pow

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
PAD_LETTER = "X"
PAD_CODE = f"{ALPHABET.index(PAD_LETTER):02d}"


def compute_block_size(n: int) -> int:
    """
    Digit width of a plaintext block for modulus n.

    Grow "25", "2525", ... while the value stays <= n and return the width
    of the last one that fit.
    """
    block = ""
    while int(block + "25") <= n:
        block += "25"
    return len(block)


def _check_key(n: int, exponent: int) -> None:
    if n < MIN_MODULUS:
        raise InvalidInputError(f"modulus {n} is too small to encode a letter")
    if exponent < 1:
        raise InvalidInputError(f"exponent must be positive, got {exponent}")


def _letter_codes(message: str) -> List[str]:
    codes = []
    for position, letter in enumerate(message):
        index = ALPHABET.find(letter)
        if index < 0:
            raise InvalidInputError(
                f"character {letter!r} at position {position} is not in {ALPHABET}"
            )
        codes.append(f"{index:02d}")
    return codes


def encode(n: int, e: int, message: str) -> str:
    """
    Encode message with the key (n, e).

    Returns the transformed blocks, each followed by a single space.
    """
    _check_key(n, e)
    codes = _letter_codes(message)
    letters_per_block = compute_block_size(n) // 2

    blocks = []
    for start in range(0, len(codes), letters_per_block):
        chunk = codes[start:start + letters_per_block]
        chunk += [PAD_CODE] * (letters_per_block - len(chunk))
        blocks.append("".join(chunk))

    width = digit_count(n)
    encoded_blocks = [f"{mod_pow(int(block), e, n):0{width}d}" for block in blocks]

    debug("message=%r codes=%s block_size=%d", message, codes, letters_per_block * 2)
    debug("blocks=%s encoded=%s", blocks, encoded_blocks)
    return "".join(block + " " for block in encoded_blocks)


def decode(n: int, d: int, encoded: str) -> str:
    """
    Decode text produced by encode() with the matching exponent.

    Spaces are optional; the digits alone must split evenly into
    digit_count(n)-wide chunks.
    """
    _check_key(n, d)
    digits = encoded.replace(" ", "")
    if set(digits) - set(string.digits):
        raise InvalidInputError("encoded message may only contain digits and spaces")

    width = digit_count(n)
    if len(digits) % width:
        raise InvalidInputError(
            f"encoded message has {len(digits)} digits, not a multiple of {width}"
        )

    block_size = compute_block_size(n)
    chunks = [digits[start:start + width] for start in range(0, len(digits), width)]
    blocks = [f"{mod_pow(int(chunk), d, n):0{block_size}d}" for chunk in chunks]
    debug("chunks=%s blocks=%s", chunks, blocks)

    letters = []
    for block in blocks:
        if len(block) != block_size:
            raise InvalidInputError(f"decoded block {block} does not fit {block_size} digits")
        for i in range(0, block_size, 2):
            code = int(block[i:i + 2])
            if code >= len(ALPHABET):
                raise InvalidInputError(f"decoded block {block} holds letter code {code}")
            letters.append(ALPHABET[code])
    return "".join(letters)


def sign(n: int, d: int, message: str) -> str:
    """The signature is the message encoded with the private exponent."""
    return encode(n, d, message)


def verify(n: int, e: int, signature: str) -> str:
    """Recover the signed text using the public exponent."""
    return decode(n, e, signature)


def signature_matches(n: int, e: int, signature: str, message: str) -> bool:
    """
    True when signature verifies to message plus at most one block of padding.
    """
    try:
        recovered = verify(n, e, signature)
    except InvalidInputError:
        return False

    padding = recovered[len(message):]
    return (
        recovered.startswith(message)
        and len(padding) < max(compute_block_size(n) // 2, 1)
        and set(padding) <= {PAD_LETTER}
    )
