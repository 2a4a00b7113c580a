"""Demonstrates rowwise with a tiny in-process host.

Run with ``python examples/example_for_each.py``.
"""

import asyncio

from rowwise import for_each, host_scope


registered = []


def it(title, body):
    registered.append((title, body))


def add(a: int, b: int) -> int:
    return a + b


for_each([(1, 2, 3), (2, 3, 5), (10, -4, 6)], it).it(
    "add(%d, %d) == %d",
    lambda a, b, expected: add(a, b) == expected,
)


async def fetch_greeting(name: str) -> str:
    await asyncio.sleep(0)
    return f"Hello, {name}!"


with host_scope(it=it):
    for_each(["World", "Alice"]).it(
        lambda name: f"greets {name}",
        lambda name: fetch_greeting(name),
    )


if __name__ == "__main__":
    for title, body in registered:
        result = body()
        if asyncio.iscoroutine(result):
            result = asyncio.run(result)
        print(f"{title}: {result}")
