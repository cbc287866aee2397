#!/usr/bin/env python3
"""
Basic usage examples for lazylinq.
"""

import logging
from lazylinq import (
    LinqConfig,
    from_container,
    from_mutable,
    from_to,
    generate,
    generate_return,
    generate_finish,
)
from lazylinq.memory import monitor


PEOPLE = [
    {"name": "Ada", "age": 36, "team": "core"},
    {"name": "Linus", "age": 28, "team": "infra"},
    {"name": "Grace", "age": 45, "team": "core"},
    {"name": "Ken", "age": 28, "team": "tools"},
]

TEAMS = [
    ("core", "Oslo"),
    ("infra", "Lima"),
    ("tools", "Rome"),
]


def example_filtering():
    """Example: Filter and project a referenced list."""
    print("\n=== Filtering Example ===")

    query = from_container(PEOPLE).where(lambda p: p["age"] < 40).select(lambda p: p["name"])

    # Nothing has run yet; the list is read on traversal
    PEOPLE.append({"name": "Barbara", "age": 31, "team": "infra"})
    print(f"Under 40: {query.to_list()}")
    PEOPLE.pop()


def example_sorting():
    """Example: Multi-key stable sort."""
    print("\n=== Sorting Example ===")

    query = (from_container(PEOPLE)
             .order_by_ascending(lambda p: p["age"])
             .then_by_descending(lambda p: p["name"]))

    for person in query:
        print(f"  {person['age']}  {person['name']}")


def example_join():
    """Example: Join people to their team's city."""
    print("\n=== Join Example ===")

    query = from_container(PEOPLE).join(
        from_container(TEAMS),
        lambda p: p["team"],
        lambda t: t[0],
        lambda p, t: (p["name"], t[1]),
    )

    print(f"Cities: {query.to_map()}")


def example_progressions():
    """Example: Numeric progressions and generators."""
    print("\n=== Progression Example ===")

    evens = from_to(0, 20).where(lambda x: x % 2 == 0)
    print(f"Sum of evens: {evens.sum()}, average: {evens.average()}")

    def squares(i):
        if i < 6:
            return generate_return(i * i)
        return generate_finish()

    print(f"Squares: {generate(squares).to_list()}")
    print(f"Page 3 of 1..100: {from_to(1, 100).skip(20).take(10).to_list()}")


def example_write_through():
    """Example: Write through a mutable cursor."""
    print("\n=== Write-through Example ===")

    scores = [3, 5, 8]
    query = from_mutable(scores)

    cursor, end = query.start(), query.sentinel()
    while cursor != end:
        cursor.assign(cursor.current() * 10)
        cursor.advance()

    print(f"Scaled scores: {scores}")


def main():
    """Run all examples."""
    print("=== lazylinq Examples ===")
    logging.basicConfig(level=logging.DEBUG)

    # Warn on any buffer over 1000 elements
    LinqConfig.set_defaults(materialize_warning_threshold=1000)

    example_filtering()
    example_sorting()
    example_join()
    example_progressions()
    example_write_through()

    print(f"\nMaterializations: {monitor.get_stats()}")
    print("\n=== All examples completed! ===")


if __name__ == "__main__":
    main()
