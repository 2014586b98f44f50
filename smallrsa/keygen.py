import secrets
from logging import debug, info
from typing import Callable, NamedTuple, Optional, Tuple

from smallrsa.errors import InvalidInputError, KeyGenerationError
from smallrsa.modular import gcd, mod_inverse
from smallrsa.primality import is_probable_prime

# sqrt(3 000 000 000) rounded down: p * q stays under 3 billion.
PRIME_LIMIT = 54772
MAX_MODULUS = PRIME_LIMIT * PRIME_LIMIT

# One letter code (up to 25) must fit below the modulus.
MIN_MODULUS = 26

# Exponents travel as signed 64-bit integers.
MAX_EXPONENT = 2 ** 63 - 1


class KeyPair(NamedTuple):
    """
    RSA key triple. Unpacks as (n, e, d).
    """
    n: int
    e: int
    d: int

    @property
    def public_key(self) -> Tuple[int, int]:
        return self.n, self.e

    @property
    def private_key(self) -> Tuple[int, int]:
        return self.n, self.d


def random_16bit() -> int:
    """16 random bits from the OS CSPRNG."""
    return secrets.randbits(16)


def _sample(randbits: Callable[[], int], accept: Callable[[int], bool],
            max_attempts: Optional[int], what: str) -> int:
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        candidate = randbits()
        if accept(candidate):
            debug("accepted %s %d after %d draw(s)", what, candidate, attempts)
            return candidate
    raise KeyGenerationError(f"no {what} found after {max_attempts} attempts")


def generate_random_prime(randbits: Callable[[], int] = random_16bit,
                          max_attempts: Optional[int] = None) -> int:
    """
    Draw 16-bit values until one is <= PRIME_LIMIT and passes the Fermat test.

    With max_attempts=None the loop only ends once a prime turns up.
    """
    return _sample(
        randbits,
        lambda p: p <= PRIME_LIMIT and is_probable_prime(p),
        max_attempts,
        "prime",
    )


def generate_coprime_exponent(phi: int, randbits: Callable[[], int] = random_16bit,
                              max_attempts: Optional[int] = None) -> int:
    """
    Draw 16-bit values until one is in (1, phi) and coprime to phi.
    """
    return _sample(
        randbits,
        lambda e: 1 < e < phi and gcd(e, phi) == 1,
        max_attempts,
        "public exponent",
    )


def _assemble(p: int, q: int, randbits: Callable[[], int],
              max_attempts: Optional[int]) -> KeyPair:
    n = p * q
    phi = (p - 1) * (q - 1)
    e = generate_coprime_exponent(phi, randbits, max_attempts)
    d = mod_inverse(e, phi)
    return KeyPair(n=n, e=e, d=d)


def generate_key_pair(randbits: Callable[[], int] = random_16bit,
                      max_attempts: Optional[int] = None) -> KeyPair:
    """
    Generate (n, e, d) from two random primes.

    Draws where p == q, or where n is too small to hold a single letter, are
    thrown away and both primes are drawn again.
    """
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        p = generate_random_prime(randbits, max_attempts)
        q = generate_random_prime(randbits, max_attempts)
        if p == q or p * q < MIN_MODULUS:
            debug("rejected prime pair p=%d q=%d", p, q)
            continue

        pair = _assemble(p, q, randbits, max_attempts)
        info("generated key pair with n=%d (p=%d, q=%d)", pair.n, p, q)
        return pair
    raise KeyGenerationError(f"no usable prime pair after {max_attempts} attempts")


def key_pair_from_primes(p: int, q: int, randbits: Callable[[], int] = random_16bit,
                         max_attempts: Optional[int] = None) -> KeyPair:
    """
    Build a key pair from caller-chosen primes; only e is drawn at random.
    """
    for value in (p, q):
        if not 2 <= value <= PRIME_LIMIT:
            raise InvalidInputError(f"{value} is outside [2, {PRIME_LIMIT}]")
        if not is_probable_prime(value):
            raise InvalidInputError(f"{value} is not prime")
    if p == q:
        raise InvalidInputError("p and q must not be equal")
    if p * q < MIN_MODULUS:
        raise InvalidInputError(f"n = {p * q} is too small to encode a letter")
    return _assemble(p, q, randbits, max_attempts)


def parse_max_attempts(value: Optional[str]) -> Optional[int]:
    """
    Read an attempt cap from configuration text; empty or missing means no cap.
    """
    if value is None or not value.strip():
        return None
    text = value.strip()
    if not text.isdecimal() or int(text) < 1:
        raise InvalidInputError(f"max attempts must be a positive integer, got {value!r}")
    return int(text)
