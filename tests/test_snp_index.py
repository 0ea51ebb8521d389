import numpy as np
import pandas as pd
import pytest

from snpasso.association.snp_index import (
    check_index_range,
    expand_snp_results,
    rev_snp_index,
    snpinfo_to_map,
    validate_snp_index,
)
from snpasso.utils.data_types import SNPInfo
from snpasso.utils.exceptions import LengthMismatchError, OutOfRangeError, ValidationError


def _make_snpinfo() -> pd.DataFrame:
    # chr1: classes 1 and 2 alternate; chr2: classes 5 and 6, 5 repeated
    return pd.DataFrame(
        {
            "chr": ["1", "1", "1", "1", "2", "2", "2"],
            "pos": [1.0, 2.0, 3.0, 4.0, 1.5, 2.5, 3.5],
            "sdp": [1, 2, 1, 2, 3, 4, 3],
            "snp": [f"s{i}" for i in range(1, 8)],
            "index": [1, 2, 1, 2, 5, 6, 5],
            "intervals": [0, 0, 0, 0, 1, 1, 1],
            "on_map": [False] * 7,
        }
    )


def _make_lod() -> pd.DataFrame:
    return pd.DataFrame(
        {"liver": [1.0, 3.0, 2.0, 5.0], "spleen": [0.1, 0.2, 0.3, 0.4]},
        index=["s1", "s2", "s5", "s6"],
    )


def test_snpinfo_to_map_keeps_distinct_snps_per_chromosome() -> None:
    snp_map = snpinfo_to_map(_make_snpinfo())

    assert list(snp_map) == ["1", "2"]
    assert list(snp_map["1"].index) == ["s1", "s2"]
    np.testing.assert_allclose(snp_map["1"].to_numpy(), [1.0, 2.0])
    assert list(snp_map["2"].index) == ["s5", "s6"]
    np.testing.assert_allclose(snp_map["2"].to_numpy(), [1.5, 2.5])


def test_snpinfo_to_map_is_deterministic() -> None:
    snpinfo = _make_snpinfo()
    first = snpinfo_to_map(snpinfo)
    second = snpinfo_to_map(snpinfo)

    assert list(first) == list(second)
    for chrom in first:
        pd.testing.assert_series_equal(first[chrom], second[chrom])


def test_snpinfo_to_map_preserves_first_seen_chromosome_order() -> None:
    df = pd.DataFrame(
        {
            "chr": pd.Categorical(["X", "X", "10", "2"], categories=["2", "10", "X"]),
            "pos": [5.0, 6.0, 1.0, 2.0],
            "snp": ["a", "b", "c", "d"],
            "index": [1, 2, 3, 4],
        }
    )

    snp_map = snpinfo_to_map(df)

    assert list(snp_map) == ["X", "10", "2"]


def test_snpinfo_to_map_uses_first_row_of_each_class() -> None:
    # canonical row of class 2 is the second row, but the first row is seen first
    df = pd.DataFrame(
        {"chr": ["1", "1", "1"], "pos": [10.0, 20.0, 30.0], "snp": ["a", "b", "c"], "index": [2, 2, 3]}
    )

    snp_map = snpinfo_to_map(df)

    assert list(snp_map["1"].index) == ["a", "c"]
    np.testing.assert_allclose(snp_map["1"].to_numpy(), [10.0, 30.0])


@pytest.mark.parametrize("bad_index", [[0, 1, 1], [1, 1, 4]])
def test_snpinfo_to_map_rejects_index_out_of_range(bad_index) -> None:
    df = pd.DataFrame({"chr": ["1"] * 3, "pos": [1.0, 2.0, 3.0], "snp": ["a", "b", "c"], "index": bad_index})

    with pytest.raises(OutOfRangeError, match=r"\[1, 3\]"):
        snpinfo_to_map(df)
    with pytest.raises(OutOfRangeError):
        check_index_range(df)


def test_rev_snp_index_ranks_classes_by_first_appearance() -> None:
    df = pd.DataFrame({"index": [3, 1, 3, 2, 1]})

    np.testing.assert_array_equal(rev_snp_index(df), [0, 1, 0, 2, 1])


def test_expand_snp_results_replicates_class_rows() -> None:
    snpinfo = _make_snpinfo()
    snp_map = snpinfo_to_map(snpinfo)

    lod, full_map = expand_snp_results(_make_lod(), snp_map, snpinfo)

    assert len(lod) == len(snpinfo)
    assert list(lod.index) == [f"s{i}" for i in range(1, 8)]
    assert list(lod.columns) == ["liver", "spleen"]
    np.testing.assert_allclose(lod["liver"].to_numpy(), [1.0, 3.0, 1.0, 3.0, 2.0, 5.0, 2.0])

    # SNPs sharing a class get identical rows
    pd.testing.assert_series_equal(lod.loc["s1"], lod.loc["s3"], check_names=False)
    pd.testing.assert_series_equal(lod.loc["s5"], lod.loc["s7"], check_names=False)

    assert list(full_map) == ["1", "2"]
    assert list(full_map["1"].index) == ["s1", "s2", "s3", "s4"]
    np.testing.assert_allclose(full_map["2"].to_numpy(), [1.5, 2.5, 3.5])


def test_expand_snp_results_does_not_modify_inputs() -> None:
    snpinfo = _make_snpinfo()
    snp_map = snpinfo_to_map(snpinfo)
    lod = _make_lod()
    lod_before = lod.copy()

    expand_snp_results(lod, snp_map, snpinfo)

    pd.testing.assert_frame_equal(lod, lod_before)
    assert list(snp_map["1"].index) == ["s1", "s2"]


def test_expand_snp_results_all_distinct_is_identity() -> None:
    df = pd.DataFrame(
        {"chr": ["1"] * 4, "pos": [1.0, 2.0, 3.0, 4.0], "snp": ["a", "b", "c", "d"], "index": [1, 2, 3, 4]}
    )
    compressed = pd.DataFrame({"lod": [0.5, 1.5, 2.5, 3.5]})

    lod, _ = expand_snp_results(compressed, snpinfo_to_map(df), df)

    np.testing.assert_allclose(lod["lod"].to_numpy(), compressed["lod"].to_numpy())
    assert list(lod.index) == ["a", "b", "c", "d"]


def test_expand_snp_results_single_class_fills_every_snp() -> None:
    n = 6
    df = pd.DataFrame(
        {"chr": ["7"] * n, "pos": np.linspace(0, 5, n), "snp": [f"m{i}" for i in range(n)], "index": [1] * n}
    )
    compressed = pd.DataFrame({"lod": [4.2]})

    lod, full_map = expand_snp_results(compressed, snpinfo_to_map(df), df)

    assert len(lod) == n
    np.testing.assert_allclose(lod["lod"].to_numpy(), np.full(n, 4.2))
    assert len(full_map["7"]) == n


def test_expand_snp_results_length_mismatches() -> None:
    snpinfo = _make_snpinfo()
    snp_map = snpinfo_to_map(snpinfo)

    with pytest.raises(LengthMismatchError, match=r"\[3\].*\[4\]"):
        expand_snp_results(_make_lod().iloc[:3], snp_map, snpinfo)

    extra_map = dict(snp_map)
    extra_map["3"] = pd.Series([1.0], index=["z"])
    with pytest.raises(LengthMismatchError, match=r"\[3\] != length\(snpinfo\) \[2\]"):
        expand_snp_results(_make_lod(), extra_map, snpinfo)


def test_validate_snp_index_count_mismatch_reports_both_counts() -> None:
    df = pd.DataFrame(
        {"chr": ["1"] * 4, "pos": [1.0, 2.0, 3.0, 4.0], "snp": ["a", "b", "c", "d"], "index": [1, 2, 3, 4]}
    )

    with pytest.raises(ValidationError) as excinfo:
        validate_snp_index(df, 3)

    message = str(excinfo.value)
    assert "3" in message and "4" in message


def test_validate_snp_index_canonical_rows_point_to_themselves() -> None:
    df = pd.DataFrame({"chr": ["1", "1"], "pos": [1.0, 2.0], "snp": ["a", "b"], "index": [2, 1]})

    with pytest.raises(ValidationError, match=r"index\[u\] should == u"):
        validate_snp_index(df, 2)

    validate_snp_index(_make_snpinfo(), 4)
    validate_snp_index(SNPInfo(_make_snpinfo()), 4)


def test_validate_snp_index_range_checked_before_invariant() -> None:
    df = pd.DataFrame({"chr": ["1", "1"], "pos": [1.0, 2.0], "snp": ["a", "b"], "index": [0, 1]})

    with pytest.raises(OutOfRangeError):
        validate_snp_index(df, 2)


def test_expand_snp_results_map_chromosome_missing_from_snpinfo() -> None:
    snpinfo = _make_snpinfo()
    snp_map = snpinfo_to_map(snpinfo)
    renamed = {"1": snp_map["1"], "3": snp_map["2"]}

    with pytest.raises(ValidationError, match="Chromosome 3 in map not found in snpinfo"):
        expand_snp_results(_make_lod(), renamed, snpinfo)


def test_expand_snp_results_per_chromosome_class_count_mismatch() -> None:
    snpinfo = _make_snpinfo()
    snp_map = snpinfo_to_map(snpinfo)
    # total length still matches the four result rows
    shifted = {
        "1": snp_map["1"].iloc[:1],
        "2": pd.concat([snp_map["2"], pd.Series([9.0], index=["extra"])]),
    }

    with pytest.raises(LengthMismatchError, match=r"length\(map\[1\]\) \[1\] != distinct SNPs on chromosome \[2\]"):
        expand_snp_results(_make_lod(), shifted, snpinfo)


def test_expand_snp_results_rejects_missing_chromosome_labels() -> None:
    df = pd.DataFrame({"chr": ["1", np.nan], "pos": [1.0, 2.0], "snp": ["a", "b"], "index": [1, 1]})

    with pytest.raises(ValueError, match="missing chromosome labels"):
        expand_snp_results(pd.DataFrame({"lod": [1.0]}), {"1": pd.Series([1.0], index=["a"])}, df)
