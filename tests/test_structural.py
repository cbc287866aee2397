#!/usr/bin/env python3
"""
Tests for reverse, append and repeat.
"""

import unittest
from lazylinq import from_container, from_values, from_to


class CountingList(list):
    """List that counts how often iteration is started."""

    def __init__(self, *args):
        super().__init__(*args)
        self.iter_calls = 0

    def __iter__(self):
        self.iter_calls += 1
        return super().__iter__()


class TestReverse(unittest.TestCase):
    """Test reverse."""

    def test_reverse(self):
        self.assertEqual(from_values(1, 2, 3, 4).reverse().to_list(), [4, 3, 2, 1])

    def test_double_reverse_restores_order(self):
        nums = [5, 1, 4, 2, 3]

        self.assertEqual(from_container(nums).reverse().reverse().to_list(), nums)

    def test_empty(self):
        self.assertEqual(from_values().reverse().to_list(), [])

    def test_rematerialized_per_traversal(self):
        """Test that each traversal buffers the predecessor again."""
        nums = CountingList([1, 2, 3])
        query = from_container(nums).reverse()

        self.assertEqual(nums.iter_calls, 0)
        self.assertEqual(query.to_list(), [3, 2, 1])

        nums.append(4)
        self.assertEqual(query.to_list(), [4, 3, 2, 1])
        self.assertEqual(nums.iter_calls, 2)

    def test_independent_cursors(self):
        """Test that two traversals of one range do not share a buffer."""
        query = from_values(1, 2, 3).reverse()

        first = query.start()
        second = query.start()
        first.advance()

        self.assertEqual(first.current(), 2)
        self.assertEqual(second.current(), 3)

    def test_reverse_filtered(self):
        query = from_to(1, 10).where(lambda x: x % 2 == 0).reverse()

        self.assertEqual(query.to_list(), [10, 8, 6, 4, 2])


class TestAppend(unittest.TestCase):
    """Test append."""

    def test_simple_append(self):
        """Test appending two referencing ranges."""
        nums1 = [1, 2, 3, 4]
        nums2 = [5, 6, 7, 8]

        query = from_container(nums1).append(from_container(nums2))
        self.assertEqual(query.to_list(), [1, 2, 3, 4, 5, 6, 7, 8])

        nums1.append(9)
        nums2.append(10)
        self.assertEqual(query.to_list(), [1, 2, 3, 4, 9, 5, 6, 7, 8, 10])

    def test_empty_sides(self):
        self.assertEqual(from_values(1, 2).append(from_values()).to_list(), [1, 2])
        self.assertEqual(from_values().append(from_values(3)).to_list(), [3])
        self.assertEqual(from_values().append(from_values()).to_list(), [])

    def test_append_to_itself(self):
        query = from_values(1, 2)

        self.assertEqual(query.append(query).to_list(), [1, 2, 1, 2])

    def test_requires_range(self):
        with self.assertRaises(TypeError):
            from_values(1).append([2, 3])


class TestRepeat(unittest.TestCase):
    """Test repeat."""

    def test_repeat_once(self):
        query = from_to(0, 5).repeat(1)

        self.assertEqual(query.to_list(), [0, 1, 2, 3, 4, 5, 0, 1, 2, 3, 4, 5])

    def test_count_scales(self):
        """Test that count is N plus repeat count times N."""
        base = from_to(1, 6)

        for times in range(4):
            self.assertEqual(base.repeat(times).count(), 6 + times * 6)

    def test_repeat_zero(self):
        self.assertEqual(from_values(1, 2).repeat(0).to_list(), [1, 2])

    def test_repeat_empty(self):
        self.assertEqual(from_values().repeat(3).to_list(), [])

    def test_restarts_predecessor(self):
        """Test that each extra pass starts the predecessor again."""
        nums = CountingList([1, 2])
        query = from_container(nums).repeat(2)

        self.assertEqual(query.to_list(), [1, 2, 1, 2, 1, 2])
        self.assertEqual(nums.iter_calls, 3)

    def test_repeat_negative(self):
        with self.assertRaises(ValueError):
            from_values(1).repeat(-1)


if __name__ == "__main__":
    unittest.main()
