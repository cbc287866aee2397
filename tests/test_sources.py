#!/usr/bin/env python3
"""
Tests for source adapters.
"""

import unittest
from lazylinq import (
    from_container, from_mutable, from_copy, from_values, from_to,
    generate, generate_return, generate_finish, GeneratorResult,
)


PEOPLE = [
    ("P1", 20),
    ("P2", 21),
    ("P3", 22),
    ("P4", 10),
    ("P5", -10),
    ("P6", 391),
]


class CountingList(list):
    """List that counts how often iteration is started."""

    def __init__(self, *args):
        super().__init__(*args)
        self.iter_calls = 0

    def __iter__(self):
        self.iter_calls += 1
        return super().__iter__()


class Addable:
    """User type supporting only ordering and addition."""

    def __init__(self, value):
        self.value = value

    def __add__(self, other):
        other_value = other.value if isinstance(other, Addable) else other
        return Addable(self.value + other_value)

    def __lt__(self, other):
        return self.value < other.value

    def __eq__(self, other):
        return isinstance(other, Addable) and self.value == other.value

    def __repr__(self):
        return f"Addable({self.value})"


class TestContainerSources(unittest.TestCase):
    """Test reference, mutable and copying adapters."""

    def test_direct_link(self):
        """Test iterating a container directly."""
        lines = [f"{name}: {age}" for name, age in from_container(PEOPLE)]

        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[0], "P1: 20")
        self.assertEqual(lines[4], "P5: -10")
        self.assertEqual(lines[5], "P6: 391")

    def test_iteration_started_once_per_traversal(self):
        """Test that a traversal starts the container's iteration exactly once."""
        nums = CountingList([1, 2, 3, 4])

        query = from_container(nums)
        self.assertEqual(nums.iter_calls, 0)

        for _ in query:
            pass
        self.assertEqual(nums.iter_calls, 1)

        nums = CountingList([1, 2, 3, 4])
        query = from_container(nums).where(lambda num: num > 0)
        self.assertEqual(nums.iter_calls, 0)

        for _ in query:
            pass
        self.assertEqual(nums.iter_calls, 1)

    def test_repeated_traversal_restarts(self):
        """Test that every traversal starts the source again."""
        nums = CountingList([1, 2, 3])
        query = from_container(nums)

        self.assertEqual(query.to_list(), [1, 2, 3])
        self.assertEqual(query.to_list(), [1, 2, 3])
        self.assertEqual(nums.iter_calls, 2)

    def test_reference_observes_mutation(self):
        """Test that a referencing range sees later changes."""
        nums = [1, 2, 3]
        query = from_container(nums)
        nums.append(4)

        self.assertEqual(query.to_list(), [1, 2, 3, 4])

    def test_null_container(self):
        """Test that a null container is rejected at construction."""
        with self.assertRaises(ValueError):
            from_container(None)
        with self.assertRaises(ValueError):
            from_mutable(None)
        with self.assertRaises(TypeError):
            from_container(42)

    def test_mapping_yields_pairs(self):
        """Test that mappings yield (key, value) pairs."""
        ages = {"P1": 20, "P2": 21}

        self.assertEqual(from_container(ages).to_list(), [("P1", 20), ("P2", 21)])

    def test_mutable_sequence_assign(self):
        """Test writing through a mutable cursor into a list."""
        nums = [1, 2, 3, 4]
        query = from_mutable(nums)

        cursor, end = query.start(), query.sentinel()
        while cursor != end:
            cursor.assign(cursor.current() * 2)
            cursor.advance()

        self.assertEqual(nums, [2, 4, 6, 8])

    def test_mutable_mapping_assign(self):
        """Test writing through a mutable cursor into a dict."""
        scores = {"a": 1, "b": 2}
        query = from_mutable(scores)

        cursor, end = query.start(), query.sentinel()
        while cursor != end:
            key, value = cursor.current()
            cursor.assign(value * 10)
            self.assertEqual(cursor.current(), (key, value * 10))
            cursor.advance()

        self.assertEqual(scores, {"a": 10, "b": 20})

    def test_mutable_requires_mutable_container(self):
        """Test that immutable containers are rejected."""
        with self.assertRaises(TypeError):
            from_mutable((1, 2, 3))

    def test_copy_is_independent(self):
        """Test that a copying range ignores later changes to the source."""
        rows = [[1], [2]]
        query = from_copy(rows)

        rows.append([3])
        rows[0].append(99)

        self.assertEqual(query.to_list(), [[1], [2]])

    def test_literal_values(self):
        """Test ranges over inline values."""
        self.assertEqual(from_values(1, 2, 3).to_list(), [1, 2, 3])
        self.assertEqual(from_values(1, 2, 3).select_to_text().to_list(), ["1", "2", "3"])
        self.assertEqual(from_values().to_list(), [])


class TestFromTo(unittest.TestCase):
    """Test numeric progressions."""

    def test_default_step(self):
        query = from_to(0, 10)

        self.assertEqual(query.count(), 11)
        self.assertEqual(query.to_list(), list(range(11)))

    def test_step_two(self):
        self.assertEqual(from_to(0, 10, 2).to_list(), [0, 2, 4, 6, 8, 10])

    def test_overshooting_step_is_clamped(self):
        """Test that the last value is exactly the end bound."""
        self.assertEqual(from_to(0, 10, 3).to_list(), [0, 3, 6, 9, 10])

    def test_descending(self):
        self.assertEqual(from_to(5, 0).to_list(), [5, 4, 3, 2, 1, 0])
        self.assertEqual(from_to(5, 0, -2).to_list(), [5, 3, 1, 0])

    def test_step_sign_normalized(self):
        """Test that the step is pointed towards the end bound."""
        self.assertEqual(from_to(0, 4, -2).to_list(), [0, 2, 4])
        self.assertEqual(from_to(4, 0, 2).to_list(), [4, 2, 0])

    def test_single_value(self):
        self.assertEqual(from_to(3, 3).to_list(), [3])

    def test_zero_step(self):
        with self.assertRaises(ValueError):
            from_to(0, 10, 0)

    def test_floats(self):
        self.assertEqual(from_to(0.0, 1.0, 0.5).to_list(), [0.0, 0.5, 1.0])

    def test_custom_addable(self):
        """Test a user type with only ordering and addition."""
        query = from_to(Addable(0), Addable(10))

        self.assertEqual(query.count(), 11)
        self.assertEqual(query.to_list(), [Addable(i) for i in range(11)])


class TestGenerate(unittest.TestCase):
    """Test generator-driven ranges."""

    def test_generate(self):
        """Test a finite generator."""
        def generator(iteration):
            if iteration < 10:
                return generate_return(iteration * 2)
            return generate_finish()

        query = generate(generator)

        self.assertEqual(query.count(), 10)
        self.assertEqual(query.to_list(), [0, 2, 4, 6, 8, 10, 12, 14, 16, 18])

    def test_finished_result_not_emitted(self):
        """Test that the callback is invoked up to and including the finish."""
        calls = []

        def generator(iteration):
            calls.append(iteration)
            return generate_return(iteration) if iteration < 3 else generate_finish()

        self.assertEqual(generate(generator).to_list(), [0, 1, 2])
        self.assertEqual(calls, [0, 1, 2, 3])

    def test_construction_is_lazy(self):
        calls = []
        generate(lambda i: calls.append(i) or generate_finish())

        self.assertEqual(calls, [])

    def test_invalid_generator_result(self):
        query = generate(lambda i: i)

        with self.assertRaises(TypeError):
            query.to_list()

    def test_result_equality_by_tag(self):
        """Test that results compare by tag only."""
        self.assertEqual(generate_finish(), generate_finish())
        self.assertEqual(generate_return(1), generate_return(2))
        self.assertNotEqual(generate_return(1), generate_finish())
        self.assertIsInstance(generate_return(1), GeneratorResult)


if __name__ == "__main__":
    unittest.main()
