from logging import info
from typing import Tuple

from smallrsa.errors import InvalidInputError
from smallrsa.modular import mod_inverse


def factor_modulus(n: int) -> Tuple[int, int]:
    """
    Scan i = n-1, n-2, ..., 2 and split n at the first divisor found.

    The first hit is the largest proper divisor, so p is n over its smallest
    prime factor. Runs in O(n).
    """
    for i in range(n - 1, 1, -1):
        if n % i == 0:
            return i, n // i
    raise InvalidInputError(f"{n} has no divisor between 2 and {n - 1}")


def recover_private_key(n: int, e: int) -> int:
    """
    Brute-force the private exponent d from the public key (n, e).
    """
    p, q = factor_modulus(n)
    phi = (p - 1) * (q - 1)
    try:
        d = mod_inverse(e, phi)
    except ValueError as err:
        raise InvalidInputError(f"e={e} is not invertible modulo phi={phi}") from err
    info("recovered d=%d from n=%d (p=%d, q=%d)", d, n, p, q)
    return d
