from __future__ import annotations

from typing import MutableSequence


def cnk(n: int, k: int) -> int:
    """Binomial coefficient, 0 when k > n."""
    if n < k:
        return 0
    if k > n // 2:
        k = n - k
    s = 1
    i = n
    j = 1
    while i != n - k:
        s *= i
        s //= j
        i -= 1
        j += 1
    return s


def factorial(n: int) -> int:
    f = 1
    for i in range(2, n + 1):
        f *= i
    return f


def rotate_left(values: MutableSequence[int], left: int, right: int) -> None:
    head = values[left]
    for i in range(left, right):
        values[i] = values[i + 1]
    values[right] = head


def rotate_right(values: MutableSequence[int], left: int, right: int) -> None:
    tail = values[right]
    for i in range(right, left, -1):
        values[i] = values[i - 1]
    values[left] = tail
