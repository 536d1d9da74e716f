"""
Tests for divisor and ordered factorization enumeration.
"""

import itertools
import logging
import math

import pytest


class TestDivisors:
    """Tests for the divisor set builder."""

    def test_divisors_of_12(self):
        """Test divisors of a composite number."""
        from tilefactor.factors import get_divisors, divisor_set

        assert get_divisors(12) == [1, 2, 3, 4, 6, 12]
        assert divisor_set(12) == {1, 2, 3, 4, 6, 12}

    def test_perfect_square(self):
        """Square root is listed once."""
        from tilefactor.factors import get_divisors

        assert get_divisors(36) == [1, 2, 3, 4, 6, 9, 12, 18, 36]

    def test_small_values(self):
        """n = 0 and n = 1 terminate with the expected sets."""
        from tilefactor.factors import get_divisors

        assert get_divisors(1) == [1]
        assert get_divisors(0) == []

    def test_negative_rejected(self):
        from tilefactor.factors import get_divisors

        with pytest.raises(ValueError):
            get_divisors(-4)

    def test_matches_brute_force(self):
        """Every member divides n and the count is d(n)."""
        from tilefactor.factors import divisor_count, divisor_set

        for n in range(1, 300):
            divs = divisor_set(n)
            assert all(n % d == 0 for d in divs)
            assert divisor_count(n) == sum(1 for d in range(1, n + 1) if n % d == 0)


class TestFactors:
    """Tests for Factors enumeration."""

    def test_two_way_split(self):
        """All ordered pairs of 12, and nothing else."""
        from tilefactor.factors import Factors

        f = Factors(12, 2)

        assert set(f) == {(1, 12), (2, 6), (3, 4), (4, 3), (6, 2), (12, 1)}
        assert len(f) == 6
        assert f.size() == 6

    def test_product_and_length(self):
        """Every tuple has order entries multiplying to n."""
        from tilefactor.factors import Factors, get_divisors

        for n in (1, 6, 12, 16, 30, 64):
            for order in range(1, 5):
                f = Factors(n, order)
                for cofactors in f:
                    assert len(cofactors) == order
                    assert math.prod(cofactors) == n

                # Exactly the ordered factorizations, no duplicates
                divs = get_divisors(n)
                expected = {
                    t for t in itertools.product(divs, repeat=order)
                    if math.prod(t) == n
                }
                assert len(f) == len(set(f)) == len(expected)
                assert set(f) == expected

    def test_order_zero(self):
        """Order 0 gives exactly the empty tuple."""
        from tilefactor.factors import Factors

        assert list(Factors(12, 0)) == [()]

    def test_n_equals_one(self):
        """n = 1 gives a single tuple of ones."""
        from tilefactor.factors import Factors

        assert list(Factors(1, 4)) == [(1, 1, 1, 1)]

    def test_enumeration_order(self):
        """Divisors are tried in ascending order and appended last."""
        from tilefactor.factors import Factors

        assert list(Factors(6, 2)) == [(6, 1), (3, 2), (2, 3), (1, 6)]

    def test_deterministic(self):
        """Identical inputs give identical collections."""
        from tilefactor.factors import Factors

        assert list(Factors(60, 3)) == list(Factors(60, 3))
        assert list(Factors(60, 3, {1: 5})) == list(Factors(60, 3, {1: 5}))

    def test_indexing(self):
        """Indexed access and out-of-range failure."""
        from tilefactor.factors import Factors

        f = Factors(6, 2)
        assert f[0] == (6, 1)
        assert f[-1] == (1, 6)
        with pytest.raises(IndexError):
            f[len(f)]

    def test_invalid_arguments(self):
        """Contract violations raise ValueError."""
        from tilefactor.factors import Factors, MAX_ORDER

        with pytest.raises(ValueError):
            Factors(-1, 2)
        with pytest.raises(ValueError):
            Factors(12, -1)
        with pytest.raises(ValueError):
            Factors(12, MAX_ORDER + 1)


class TestGivenFactors:
    """Tests for caller-pinned factors."""

    def test_given_splice(self):
        """Given value lands at its declared position."""
        from tilefactor.factors import Factors

        f = Factors(12, 3, given={1: 4})

        assert list(f) == [(3, 4, 1), (1, 4, 3)]
        assert all(c[1] == 4 and math.prod(c) == 12 for c in f)
        assert f.given == {1: 4}

    def test_given_multiple_positions(self):
        """Several given values keep their final positions."""
        from tilefactor.factors import Factors

        f = Factors(60, 4, given={0: 2, 3: 5})

        assert len(f) > 0
        for c in f:
            assert c[0] == 2
            assert c[3] == 5
            assert math.prod(c) == 60
        assert set(c[1:3] for c in f) == set(Factors(6, 2))

    def test_non_divisor_becomes_free(self, caplog):
        """A given value that does not divide n is dropped with a warning."""
        from tilefactor.factors import Factors

        with caplog.at_level(logging.WARNING):
            f = Factors(12, 3, given={0: 5})

        assert "Cannot accept 5 as a factor of 12" in caplog.text
        assert f.given == {}
        assert list(f) == list(Factors(12, 3))

    def test_partial_product_conflict(self, caplog):
        """A value that divides n but not n / partial_product is dropped."""
        from tilefactor.factors import Factors

        with caplog.at_level(logging.WARNING):
            f = Factors(12, 3, given={0: 4, 1: 4})

        assert "partial product 4" in caplog.text
        assert f.given == {0: 4}
        assert len(f) > 0
        assert all(c[0] == 4 and math.prod(c) == 12 for c in f)

    def test_all_positions_given(self):
        """Fully pinned tuples survive only if they multiply to n."""
        from tilefactor.factors import Factors

        assert list(Factors(12, 2, given={0: 3, 1: 4})) == [(3, 4)]

        short = Factors(12, 2, given={0: 2, 1: 3})
        assert short.given == {0: 2, 1: 3}
        assert len(short) == 0

    def test_too_many_given(self):
        """More given factors than positions is a contract violation."""
        from tilefactor.factors import Factors

        with pytest.raises(ValueError):
            Factors(12, 1, given={0: 2, 1: 6})

    def test_given_position_out_of_range(self):
        from tilefactor.factors import Factors

        with pytest.raises(ValueError):
            Factors(12, 2, given={2: 3})


class TestPruneMax:
    """Tests for max-factor pruning."""

    def test_prune_position_zero(self):
        """No survivor exceeds the limit."""
        from tilefactor.factors import Factors

        f = Factors(12, 2)
        removed = f.prune_max({0: 3})

        assert removed == 3
        assert set(f) == {(1, 12), (2, 6), (3, 4)}

    def test_prune_with_given(self):
        """Pruning works on spliced tuples."""
        from tilefactor.factors import Factors

        f = Factors(12, 3, given={1: 4})
        f.prune_max({0: 2})

        assert list(f) == [(1, 4, 3)]

    def test_prune_idempotent(self):
        from tilefactor.factors import Factors

        f = Factors(36, 3)
        f.prune_max({0: 4, 2: 6})
        survivors = list(f)

        assert f.prune_max({0: 4, 2: 6}) == 0
        assert list(f) == survivors
        assert all(c[0] <= 4 and c[2] <= 6 for c in survivors)

    def test_prune_to_empty(self):
        """An empty collection is a valid outcome."""
        from tilefactor.factors import Factors

        f = Factors(7, 2)
        f.prune_max({0: 6, 1: 6})

        assert len(f) == 0

    def test_prune_bad_position(self):
        from tilefactor.factors import Factors

        with pytest.raises(ValueError):
            Factors(12, 2).prune_max({2: 3})


class TestRendering:
    """Tests for diagnostic output."""

    def test_format_all_factors(self):
        from tilefactor.factors import Factors

        assert Factors(6, 2).format_all_factors() == "All factors of 6: 1, 2, 3, 6"

    def test_format_cofactors(self):
        from tilefactor.factors import Factors

        lines = str(Factors(6, 2)).splitlines()

        assert lines[0].startswith("Co-factors of 6 are:")
        assert lines[1:] == [
            "    6 = 6 * 1",
            "    6 = 3 * 2",
            "    6 = 2 * 3",
            "    6 = 1 * 6",
        ]

    def test_print(self, capsys):
        from tilefactor.factors import Factors

        Factors(4, 2).print()
        out = capsys.readouterr().out

        assert "All factors of 4: 1, 2, 4" in out
        assert "    4 = 2 * 2" in out
