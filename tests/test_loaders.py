import numpy as np
import pandas as pd
import pytest

from snpasso.data import loaders
from snpasso.data.io_utils import save_expanded_results, snp_results_to_frame
from snpasso.utils.data_types import SNPInfo, ScanResults
from snpasso.utils.exceptions import LengthMismatchError


def _write_snpinfo(path, sep=",") -> None:
    pd.DataFrame(
        {
            "chrom": [1, 1, 2],
            "position": [0.5, 1.5, 2.5],
            "marker": ["rs1", "rs2", "rs3"],
            "sdp": [1, 1, 2],
            "index": [1, 1, 3],
        }
    ).to_csv(path, sep=sep, index=False)


def test_detect_file_format_by_extension_and_content(tmp_path) -> None:
    assert loaders.detect_file_format(tmp_path / "a.csv") == "csv"
    assert loaders.detect_file_format(tmp_path / "a.tsv.gz") == "tsv"
    assert loaders.detect_file_format(tmp_path / "a.txt") == "tsv"

    tab_file = tmp_path / "noext"
    tab_file.write_text("chr\tpos\n1\t2\n")
    assert loaders.detect_file_format(tab_file) == "tsv"

    assert loaders.detect_file_format(tmp_path / "missing") == "unknown"


@pytest.mark.parametrize("name,sep", [("snpinfo.csv", ","), ("snpinfo.tsv", "\t")])
def test_load_snpinfo_file_standardizes_columns(tmp_path, name, sep) -> None:
    path = tmp_path / name
    _write_snpinfo(path, sep=sep)

    snpinfo = loaders.load_snpinfo_file(path)

    assert isinstance(snpinfo, SNPInfo)
    assert list(snpinfo.snp_ids) == ["rs1", "rs2", "rs3"]
    assert list(snpinfo.chromosomes) == ["1", "1", "2"]
    np.testing.assert_allclose(snpinfo.positions.to_numpy(), [0.5, 1.5, 2.5])
    assert snpinfo.n_distinct == 2
    assert snpinfo.metadata["source"] == str(path)


def test_load_snpinfo_file_missing_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        loaders.load_snpinfo_file(tmp_path / "nope.csv")


def test_load_scan_results_file_keeps_numeric_columns(tmp_path) -> None:
    path = tmp_path / "scan.csv"
    pd.DataFrame(
        {
            "snp": ["rs1", "rs3"],
            "liver": [1.2, 3.4],
            "spleen": [0.5, 0.7],
            "note": ["x", "y"],
        }
    ).to_csv(path, index=False)

    with pytest.warns(UserWarning, match="non-numeric"):
        scan = loaders.load_scan_results_file(path)

    assert isinstance(scan, ScanResults)
    assert scan.lod_columns == ["liver", "spleen"]
    assert list(scan.lod.index) == ["rs1", "rs3"]

    only_spleen = loaders.load_scan_results_file(path, lod_columns=["spleen"])
    assert only_spleen.lod_columns == ["spleen"]

    with pytest.raises(ValueError, match="not found"):
        loaders.load_scan_results_file(path, lod_columns=["kidney"])


def test_save_expanded_results_round_trips_table(tmp_path) -> None:
    lod = pd.DataFrame({"liver": [1.0, 2.0, 3.0]}, index=["a", "b", "c"])
    snp_map = {
        "1": pd.Series([0.1, 0.2], index=["a", "b"]),
        "X": pd.Series([5.0], index=["c"]),
    }

    table = snp_results_to_frame(lod, snp_map)
    assert list(table.columns) == ["snp", "chr", "pos", "liver"]
    assert list(table["chr"]) == ["1", "1", "X"]

    out = save_expanded_results(lod, snp_map, tmp_path / "lod.tsv")
    written = pd.read_csv(out, sep="\t", dtype={"chr": str})
    pd.testing.assert_frame_equal(written, table, check_dtype=False)

    with pytest.raises(LengthMismatchError):
        snp_results_to_frame(lod.iloc[:2], snp_map)
