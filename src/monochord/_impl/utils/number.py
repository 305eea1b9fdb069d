__all__ = ["tdivmod"]


def tdivmod(n: int, d: int, /) -> tuple[int, int]:
    """
    `divmod()` with the quotient truncated towards zero instead of floored, so the
    remainder takes the sign of `n` rather than of `d`. The invariant `n == q * d + r`
    still holds, as does `abs(r) < abs(d)`.
    """
    q, r = divmod(n, d)
    if r != 0 and q < 0:
        # floored one step past zero
        q += 1
        r -= d
    return (q, r)
