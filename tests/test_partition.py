import numpy as np
import pytest

from review_length.core.errors import InvalidConfig
from review_length.core.records import Dataset, Label
from review_length.experiments.partition import (
    QuantilePartitioner,
    assign_buckets,
    quantile_boundaries,
)

from conftest import make_noisy_dataset, make_record, make_separable_dataset


class TestQuantileBoundaries:
    def test_k_plus_one_boundaries_spanning_min_and_max(self):
        wc = np.array([3, 9, 1, 7, 5])
        b = quantile_boundaries(wc, 4)
        assert len(b) == 5
        assert b[0] == 1
        assert b[-1] == 9

    def test_exact_quantiles(self):
        b = quantile_boundaries(np.array([0, 10, 20, 30, 40]), 4)
        assert b.tolist() == [0.0, 10.0, 20.0, 30.0, 40.0]

    def test_k_below_two_rejected(self):
        with pytest.raises(InvalidConfig):
            quantile_boundaries(np.array([1, 2, 3]), 1)

    def test_empty_rejected(self):
        with pytest.raises(InvalidConfig):
            quantile_boundaries(np.array([]), 5)


class TestAssignBuckets:
    def test_interior_boundary_goes_to_bucket_it_opens(self):
        boundaries = np.array([0.0, 10.0, 20.0, 30.0, 40.0])
        assert assign_buckets([0, 10, 20, 30], boundaries).tolist() == [1, 2, 3, 4]

    def test_maximum_goes_to_last_bucket(self):
        boundaries = np.array([0.0, 10.0, 20.0, 30.0, 40.0])
        assert assign_buckets([40], boundaries).tolist() == [4]

    def test_just_below_boundary(self):
        boundaries = np.array([0.0, 10.0, 20.0])
        assert assign_buckets([9, 9.999, 19], boundaries).tolist() == [1, 1, 2]

    def test_repeated_boundaries_leave_empty_bucket(self):
        # half the reviews share the minimum length
        wc = np.array([5, 5, 5, 5, 6, 7, 8, 9])
        b = quantile_boundaries(wc, 4)
        idx = assign_buckets(wc, b)
        assert set(idx.tolist()) <= {1, 2, 3, 4}
        assert (idx[:4] == idx[0]).all()


class TestQuantilePartitioner:
    def test_every_record_in_exactly_one_bucket(self):
        ds = make_noisy_dataset(n=300)
        part = QuantilePartitioner(k=5).fit(ds)
        assert part.assignment_.min() >= 1
        assert part.assignment_.max() <= 5
        members = np.concatenate([part.members(b) for b in range(1, 6)])
        assert sorted(members.tolist()) == list(range(len(ds)))

    def test_bucket_ranges_non_decreasing(self):
        ds = make_noisy_dataset(n=300)
        part = QuantilePartitioner(k=5).fit(ds)
        prev_max = -np.inf
        for b in range(1, 6):
            wc = ds.word_counts[part.members(b)]
            if len(wc) == 0:
                continue
            assert wc.min() >= prev_max
            prev_max = wc.max()

    def test_members_fall_inside_bucket_bounds(self):
        ds = make_noisy_dataset(n=200)
        part = QuantilePartitioner(k=4).fit(ds)
        for bucket in part.buckets_:
            for i in part.members(bucket.index):
                wc = ds.word_counts[i]
                assert bucket.lo <= wc
                assert wc <= bucket.hi if bucket.closed_right else wc < bucket.hi

    def test_label_pools_split_each_bucket(self, separable_dataset):
        part = QuantilePartitioner(k=5).fit(separable_dataset)
        for b in part.buckets_:
            pos = part.label_members(b.index, Label.POS)
            neg = part.label_members(b.index, Label.NEG)
            assert len(pos) == b.n_pos == 100
            assert len(neg) == b.n_neg == 100
            assert (separable_dataset.labels[pos] == 1).all()
            assert (separable_dataset.labels[neg] == 0).all()

    def test_only_last_bucket_closed_right(self, separable_dataset):
        part = QuantilePartitioner(k=5).fit(separable_dataset)
        assert [b.closed_right for b in part.buckets_] == [False] * 4 + [True]

    def test_assignment_is_read_only(self, separable_dataset):
        part = QuantilePartitioner(k=5).fit(separable_dataset)
        with pytest.raises(ValueError):
            part.assignment_[0] = 3

    def test_summary_table(self, separable_dataset):
        summary = QuantilePartitioner(k=5).fit(separable_dataset).summary()
        assert summary["bucket_index"].tolist() == [1, 2, 3, 4, 5]
        assert summary["n_total"].sum() == 1000

    def test_rejects_k_below_two(self, separable_dataset):
        with pytest.raises(InvalidConfig):
            QuantilePartitioner(k=1).fit(separable_dataset)

    def test_rejects_empty_dataset(self):
        with pytest.raises(InvalidConfig):
            QuantilePartitioner(k=5).fit(Dataset([]))

    def test_unfitted_access_raises(self):
        with pytest.raises(RuntimeError):
            QuantilePartitioner(k=3).members(1)

    def test_single_length_dataset_all_in_last_bucket(self):
        ds = Dataset(make_record(i, i % 2, 12) for i in range(10))
        part = QuantilePartitioner(k=3).fit(ds)
        assert part.assignment_.tolist() == [3] * 10

    def test_small_dataset_quintiles(self):
        ds = make_separable_dataset(n=10)
        part = QuantilePartitioner(k=5).fit(ds)
        assert [b.n_total for b in part.buckets_] == [2, 2, 2, 2, 2]
