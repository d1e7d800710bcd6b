"""Small example library: Fibonacci numbers and a greeter."""

from __future__ import annotations


def fibonacci(n: int) -> int:
    """Return the nth Fibonacci number.

    >>> fibonacci(5)
    5
    """
    if n < 0:
        raise ValueError("n must not be negative")
    if n < 2:
        return n
    previous, current = 0, 1
    for _ in range(1, n):
        previous, current = current, previous + current
    return current


class Greeter:
    """Displays a greeting."""

    __slots__ = ("_greeting",)

    def __init__(self, greeting: str) -> None:
        self._greeting = greeting

    def __repr__(self) -> str:
        return f"Greeter({self._greeting!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Greeter):
            return NotImplemented
        return self._greeting == other._greeting

    def __hash__(self) -> int:
        return hash(self._greeting)

    def greeting(self, thing: str) -> str:
        """Return the greeting for ``thing``."""
        return f"{self._greeting} {thing}"

    def greet(self, thing: str) -> None:
        """Print the greeting for ``thing``."""
        print(self.greeting(thing))