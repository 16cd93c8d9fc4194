"""Tests for neighbour list construction."""

import logging

import numpy as np
import pytest

from nlcore.neighbourlists import (
    ListBuilder,
    build,
    to_one_based,
    to_pair_layout,
    to_vector_layout,
)


class TestLayoutHelpers:
    """Test index and layout conversion helpers."""

    def test_to_one_based(self):
        """Test 0-based indices shift by one."""
        assert list(to_one_based([0, 2, 1])) == [1, 3, 2]

    def test_to_vector_layout(self):
        """Test rows become columns."""
        rows = np.arange(6.0).reshape(2, 3)
        columns = to_vector_layout(rows)

        assert columns.shape == (3, 2)
        assert np.allclose(columns[:, 1], rows[1])
        assert columns.flags.c_contiguous

    def test_round_trip(self):
        """Test transpose then untranspose gives back the input."""
        rows = np.random.default_rng(0).normal(size=(5, 3))
        assert np.array_equal(to_pair_layout(to_vector_layout(rows)), rows)

    def test_empty_round_trip(self):
        """Test layouts of empty arrays."""
        rows = np.empty((0, 3))
        assert to_vector_layout(rows).shape == (3, 0)
        assert to_pair_layout(to_vector_layout(rows)).shape == (0, 3)

    def test_bad_shape(self):
        """Test non (P, 3) input is rejected."""
        with pytest.raises(ValueError):
            to_vector_layout(np.zeros((3, 2)))
        with pytest.raises(ValueError):
            to_pair_layout(np.zeros((2, 3)))


class TestListBuilder:
    """Test ListBuilder against a fixed enumerator."""

    def test_enumerator_called_once(self, four_sites, make_enumerator):
        """Test a build makes exactly one enumerator call."""
        enumerator = make_enumerator([0, 1], [1, 0])
        ListBuilder(enumerator).build(four_sites, 1.5, "ijdDS")

        assert len(enumerator.calls) == 1
        config, cutoff, quantities = enumerator.calls[0]
        assert config is four_sites
        assert cutoff == 1.5
        assert quantities == "ijdDS"

    def test_indices_one_based(self, four_sites, make_enumerator):
        """Test index arrays are converted to 1-based."""
        enumerator = make_enumerator([0, 0, 1, 3], [1, 3, 0, 0])
        nlist = ListBuilder(enumerator).build(four_sites, 1.5)

        assert list(nlist.i) == [1, 1, 2, 4]
        assert list(nlist.j) == [2, 4, 1, 1]

    def test_site_count_from_config(self, four_sites, make_enumerator):
        """Test site_count comes from the configuration, not the pairs."""
        enumerator = make_enumerator([0], [1])
        nlist = ListBuilder(enumerator).build(four_sites, 1.5)

        assert nlist.pair_count == 1
        assert nlist.site_count == 4

    def test_unsorted_output_is_sorted(self, four_sites, make_enumerator):
        """Test shuffled enumerator output is stably sorted by source."""
        enumerator = make_enumerator([0, 2, 1, 0, 2], [1, 3, 2, 3, 1])
        raw = enumerator.arrays
        nlist = ListBuilder(enumerator).build(four_sites, 1.5)

        assert list(nlist.i) == [1, 1, 2, 3, 3]
        # Stable: equal sources keep enumerator order
        assert list(nlist.j) == [2, 4, 3, 4, 2]

        # Each pair keeps its own distance and vectors
        order = [0, 3, 2, 1, 4]
        assert np.allclose(nlist.r, raw["d"][order])
        assert np.allclose(nlist.D, raw["D"][order].T)
        assert np.array_equal(nlist.S, raw["S"][order].T)

    def test_sorted_invariant_holds(self, four_sites, make_enumerator):
        """Test built lists always have non-decreasing sources."""
        rng = np.random.default_rng(7)
        i = rng.integers(0, 4, 30)
        j = rng.integers(0, 4, 30)
        nlist = ListBuilder(make_enumerator(i, j)).build(four_sites, 1.5)

        assert np.all(np.diff(nlist.i) >= 0)
        assert sum(len(g.j) for g in nlist.sites()) == nlist.pair_count

    def test_convert_arrays(self, four_sites, make_enumerator):
        """Test both layouts hold the same values."""
        enumerator = make_enumerator([0, 1, 2], [1, 2, 3])
        builder = ListBuilder(enumerator)
        by_columns = builder.build(four_sites, 1.5, convert_arrays=True)
        by_rows = builder.build(four_sites, 1.5, convert_arrays=False)

        assert by_columns.layout == "vectors"
        assert by_rows.layout == "pairs"
        assert by_columns.D.shape == (3, 3)
        assert by_rows.D.shape == (3, 3)
        assert np.array_equal(by_columns.D, by_rows.D.T)
        assert np.array_equal(by_columns.S, by_rows.S.T)

    def test_owned_copies(self, four_sites, make_enumerator):
        """Test changing enumerator buffers after build has no effect."""
        enumerator = make_enumerator([0, 1], [1, 0])
        nlist = ListBuilder(enumerator).build(four_sites, 1.5, convert_arrays=False)

        enumerator.arrays["i"][:] = 3
        enumerator.arrays["D"][:] = -7.5

        assert list(nlist.i) == [1, 2]
        assert not np.any(nlist.D == -7.5)

    def test_index_only(self, four_sites, make_enumerator):
        """Test building with only i and j."""
        nlist = ListBuilder(make_enumerator([0, 1], [1, 0])).build(
            four_sites, 1.5, "ij"
        )

        assert nlist.r is None
        assert nlist.D is None
        assert nlist.S is None
        assert [g.site for g in nlist.sites()] == [1, 2, 3, 4]

    def test_quantity_order(self, four_sites, make_enumerator):
        """Test arrays are matched to letters, not positions."""
        enumerator = make_enumerator([0, 1], [1, 0])
        nlist = ListBuilder(enumerator).build(four_sites, 1.5, "ijDd")

        assert np.allclose(nlist.r, enumerator.arrays["d"])
        assert np.allclose(nlist.D, enumerator.arrays["D"].T)

    def test_builder_defaults(self, four_sites, make_enumerator):
        """Test defaults stored on the builder."""
        builder = ListBuilder(
            make_enumerator([0, 1], [1, 0]), quantities="ijd", convert_arrays=False
        )
        nlist = builder.build(four_sites, 1.5)

        assert nlist.layout == "pairs"
        assert nlist.D is None
        assert nlist.r is not None

    def test_bothways_recorded(self, four_sites, make_enumerator):
        """Test the enumerator's list convention is recorded."""
        nlist = ListBuilder(make_enumerator([0], [1], bothways=False)).build(
            four_sites, 1.5
        )
        assert not nlist.bothways

    def test_logs_build(self, four_sites, make_enumerator, caplog):
        """Test each build is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="nlcore"):
            ListBuilder(make_enumerator([0], [1])).build(four_sites, 1.5)
        assert "1 pairs over 4 sites" in caplog.text


class TestBuildErrors:
    """Test error propagation."""

    @pytest.mark.parametrize("cutoff", [0.0, -1.0, float("nan")])
    def test_non_positive_cutoff(self, four_sites, make_enumerator, cutoff):
        """Test invalid cutoffs raise from the enumerator."""
        enumerator = make_enumerator([0], [1])
        with pytest.raises(ValueError, match="cutoff"):
            ListBuilder(enumerator).build(four_sites, cutoff)
        assert enumerator.calls == []

    def test_unknown_quantity(self, four_sites, make_enumerator):
        """Test unknown letters raise from the enumerator."""
        with pytest.raises(ValueError, match="unsupported"):
            ListBuilder(make_enumerator([0], [1])).build(four_sites, 1.5, "ijx")

    def test_quantities_must_start_with_ij(self, four_sites, make_enumerator):
        """Test quantity strings must begin with i and j."""
        enumerator = make_enumerator([0], [1])
        with pytest.raises(ValueError, match="start with 'ij'"):
            ListBuilder(enumerator).build(four_sites, 1.5, "jid")
        assert enumerator.calls == []

    def test_enumerator_errors_propagate(self, four_sites, make_enumerator):
        """Test enumerator exceptions reach the caller unchanged."""
        enumerator = make_enumerator([0], [1])

        def fail(config, cutoff, quantities):
            raise RuntimeError("search failed")

        enumerator._enumerate = fail
        with pytest.raises(RuntimeError, match="search failed"):
            ListBuilder(enumerator).build(four_sites, 1.5)


class TestBuildFunction:
    """Test the one-call build() helper."""

    def test_default_enumerator(self, four_sites):
        """Test build() works without an explicit enumerator."""
        nlist = build(four_sites, 1.5)

        # Sites 1 apart on a line: ends have one neighbour, middle two
        assert [len(g.j) for g in nlist.sites()] == [1, 2, 2, 1]
        assert nlist.bothways

    def test_explicit_enumerator(self, four_sites, make_enumerator):
        """Test build() passes an explicit enumerator through."""
        enumerator = make_enumerator([0, 3], [3, 0])
        nlist = build(four_sites, 1.5, enumerator=enumerator)

        assert len(enumerator.calls) == 1
        assert list(nlist.j) == [4, 1]

    def test_cutoff_zero(self, four_sites):
        """Test build() refuses a zero cutoff."""
        with pytest.raises(ValueError):
            build(four_sites, 0.0)
