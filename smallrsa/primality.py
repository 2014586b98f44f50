from smallrsa.modular import gcd, mod_pow

# Fermat witnesses are drawn from [1, FERMAT_WITNESS_LIMIT).
FERMAT_WITNESS_LIMIT = 1_000_000


def is_probable_prime(n: int, witness_limit: int = FERMAT_WITNESS_LIMIT) -> bool:
    """
    Fermat primality test over every witness coprime to n.

    For each a in [1, witness_limit) with gcd(a, n) == 1 we require
    a^(n-1) == 1 (mod n). One violation proves n composite; otherwise n is
    reported prime. Carmichael numbers pass every coprime witness, so they
    are reported prime too.

    Witnesses at or above n repeat the residue of a smaller witness, so the
    scan stops at min(witness_limit, n) with the same verdict.
    """
    if n < 2:
        return False

    for a in range(1, min(witness_limit, n)):
        if gcd(a, n) == 1 and mod_pow(a, n - 1, n) != 1:
            return False
    return True
