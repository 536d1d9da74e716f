"""
Tests for numeric helpers and pattern generators.
"""

import pytest


class TestNumeric:
    """Tests for tilefactor.utils."""

    def test_isqrt(self):
        from tilefactor.utils import isqrt

        assert isqrt(0) == 0
        assert isqrt(15) == 3
        assert isqrt(16) == 4
        assert isqrt(2**80) == 2**40
        with pytest.raises(ValueError):
            isqrt(-1)

    def test_smallest_factor(self):
        from tilefactor.utils import smallest_factor

        assert smallest_factor(15) == (3, 5)
        assert smallest_factor(16) == (2, 8)
        assert smallest_factor(13) == (13, 1)

    def test_prime_factors(self):
        from tilefactor.utils import get_prime_factors

        assert get_prime_factors(60) == [2, 2, 3, 5]
        assert get_prime_factors(1) == []

    def test_get_tiling(self):
        """Close-to-square layouts with height <= width."""
        from tilefactor.utils import get_tiling

        assert get_tiling(12) == (2, 6)
        assert get_tiling(16) == (4, 4)
        assert get_tiling(7) == (1, 7)
        assert get_tiling(1) == (1, 1)

    def test_linear_interpolate(self):
        from tilefactor.utils import linear_interpolate

        assert linear_interpolate(5, 0, 10, 0, 100) == pytest.approx(50)
        assert linear_interpolate(15, 0, 10, 0, 100) == pytest.approx(150)
        # Degenerate interval has zero slope
        assert linear_interpolate(3, 2, 2, 7, 9) == 7

    def test_bilinear_interpolate(self):
        from tilefactor.utils import bilinear_interpolate

        args = (0, 1, 0, 1, 0.0, 1.0, 2.0, 3.0)
        assert bilinear_interpolate(0, 0, *args) == pytest.approx(0.0)
        assert bilinear_interpolate(1, 1, *args) == pytest.approx(3.0)
        assert bilinear_interpolate(0, 1, *args) == pytest.approx(1.0)
        assert bilinear_interpolate(0.5, 0.5, *args) == pytest.approx(1.5)

    def test_format_number(self):
        from tilefactor.utils import format_number

        assert format_number(1234567) == "1,234,567"
        assert format_number(0.5) == "0.50"
        assert format_number(2.5e7) == "2.50e+07"

    def test_timer(self):
        from tilefactor.utils import Timer

        timer = Timer()
        timer.start("enumerate")
        timer.stop("enumerate")

        assert "enumerate" in timer.times
        assert "enumerate:" in timer.report()


class TestSequenceGenerator:
    """Tests for SequenceGenerator128."""

    def test_sequence(self):
        from tilefactor.pattern import SequenceGenerator128

        assert list(SequenceGenerator128(4)) == [0, 1, 2, 3]

    def test_exhausted(self):
        from tilefactor.pattern import SequenceGenerator128

        gen = SequenceGenerator128(2)
        assert gen.next() == 0
        assert gen.next() == 1
        with pytest.raises(StopIteration):
            gen.next()

        gen.reset()
        assert gen.next() == 0

    def test_autoloop(self):
        from tilefactor.pattern import SequenceGenerator128

        gen = SequenceGenerator128(3, autoloop=True)

        assert [gen.next() for _ in range(7)] == [0, 1, 2, 0, 1, 2, 0]

    def test_large_bound(self):
        from tilefactor.pattern import SequenceGenerator128

        gen = SequenceGenerator128(2**128)
        assert gen.next() == 0
        assert gen.next() == 1

    def test_invalid_bound(self):
        from tilefactor.pattern import SequenceGenerator128

        with pytest.raises(ValueError):
            SequenceGenerator128(0)
        with pytest.raises(ValueError):
            SequenceGenerator128(2**128 + 1)


class TestRandomGenerator:
    """Tests for RandomGenerator128."""

    def test_small_bound(self):
        from tilefactor.pattern import RandomGenerator128

        gen = RandomGenerator128(10, seed=0)
        values = [gen.next() for _ in range(500)]

        assert all(0 <= v < 10 for v in values)
        assert set(values) == set(range(10))
        assert not gen.use_two_generators

    def test_seeded(self):
        from tilefactor.pattern import RandomGenerator128

        a = RandomGenerator128(2**100, seed=42)
        b = RandomGenerator128(2**100, seed=42)

        assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]

    def test_wide_bounds(self):
        """Bounds past 64 bits use two words and stay in range."""
        from tilefactor.pattern import RandomGenerator128

        for bound in (2**64, 2**64 + 3, 2**100, 2**128):
            gen = RandomGenerator128(bound, seed=1)
            assert gen.use_two_generators == (bound > 2**64)
            assert all(0 <= gen.next() < bound for _ in range(100))

    def test_bound_one(self):
        from tilefactor.pattern import RandomGenerator128

        gen = RandomGenerator128(1)
        assert next(gen) == 0
