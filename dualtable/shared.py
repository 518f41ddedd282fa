from typing import Any


def printf(format: str, *args: Any):
    print(format.format(*args), end="")


def sprintf(format: str, *args: Any) -> str:
    return format.format(*args)
