"""
Tests for the bounded failure memo.
"""

import sys
import pathlib
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import pytest
from rotaplan.engine.failure_memo import FailureMemo


class TestFailureMemo:

    def test_membership_counts_hits(self):
        memo = FailureMemo(4)
        memo.add("a")
        assert "a" in memo
        assert "b" not in memo
        assert memo.hits == 1

    def test_evicts_least_recently_used(self):
        memo = FailureMemo(2)
        memo.add("a")
        memo.add("b")
        assert "a" in memo      # refresh "a"
        memo.add("c")
        assert len(memo) == 2
        assert memo.evictions == 1
        assert "b" not in memo
        assert "a" in memo and "c" in memo

    def test_re_adding_does_not_grow(self):
        memo = FailureMemo(3)
        for _ in range(5):
            memo.add(("day", 1))
        assert len(memo) == 1
        assert memo.evictions == 0

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            FailureMemo(0)
