def euclidean_mod(a: int, b: int) -> int:
    """
    Remainder of a / b following the Euclidean convention.

    The result is zero or has the same sign as b, so a positive modulus
    never yields a negative residue.
    """
    r = a % b
    if (r < 0 and b > 0) or (r > 0 and b < 0):
        return r + b
    return r


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    base^exponent mod modulus by recursive square-and-multiply.

    exponent must be >= 1. When exponent == 1 the base is returned as is,
    so callers pass a base already below the modulus.
    """
    if exponent < 1:
        raise ValueError(f"exponent must be >= 1, got {exponent}")
    if exponent == 1:
        return base

    x = euclidean_mod(mod_pow(base, exponent // 2, modulus), modulus)
    if exponent % 2 == 0:
        return euclidean_mod(x * x, modulus)
    return euclidean_mod(euclidean_mod(x * x, modulus) * base, modulus)


def gcd(a: int, b: int) -> int:
    if b == 0:
        return a
    return gcd(b, euclidean_mod(a, b))


def extended_gcd(a: int, b: int):
    """
    Bezout coefficients (s, t) with a*s + b*t == gcd(a, b).
    """
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t

    return old_s, old_t


def mod_inverse(a: int, m: int) -> int:
    """
    Inverse of a modulo m: the Bezout coefficient of a, shifted into [0, m)
    by adding m when negative.

    Raise ValueError when a and m share a factor.
    """
    if gcd(a, m) != 1:
        raise ValueError(f"{a} has no inverse modulo {m}")
    s, _ = extended_gcd(a, m)
    return s if s >= 0 else s + m


def digit_count(n: int) -> int:
    return len(str(n))
