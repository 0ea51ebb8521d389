"""
Expansion of distinct-SNP association results to all SNPs

A scan on SNP probabilities is run once per equivalence class of SNPs
(SNPs with the same strain distribution pattern within the same marker
interval). The functions here rebuild the per-chromosome map for those
classes and replicate each class's LOD scores back onto every SNP.
"""

import numpy as np
import pandas as pd
from typing import Tuple, Union

from ..utils.data_types import SNPInfo, SNPMap, as_snpinfo
from ..utils.exceptions import LengthMismatchError, OutOfRangeError, ValidationError


def check_index_range(snpinfo: Union[SNPInfo, pd.DataFrame]) -> None:
    """Raise OutOfRangeError unless every index lies in [1, number of SNPs]"""
    snpinfo = as_snpinfo(snpinfo)
    index = snpinfo.index.to_numpy()
    n = snpinfo.n_snps
    if np.any((index < 1) | (index > n)):
        raise OutOfRangeError(f"snpinfo index values outside of range [1, {n}]")


def validate_snp_index(snpinfo: Union[SNPInfo, pd.DataFrame], n_results: int) -> None:
    """Check that scan results line up with the SNP equivalence classes

    Args:
        snpinfo: SNP annotation with equivalence-class indices
        n_results: Number of rows in the (distinct-SNP) scan results

    Raises:
        ValidationError: if the number of distinct indices differs from
            n_results, or if a canonical row does not point to itself
        OutOfRangeError: if an index lies outside [1, number of SNPs]
    """
    snpinfo = as_snpinfo(snpinfo)
    uindex = pd.unique(snpinfo.index.to_numpy())
    if len(uindex) != n_results:
        raise ValidationError(
            "Something is wrong with snpinfo index: "
            f"number of distinct index values [{len(uindex)}] != "
            f"number of scan result rows [{n_results}]"
        )

    check_index_range(snpinfo)

    index = snpinfo.index.to_numpy()
    if np.any(index[uindex - 1] != uindex):
        raise ValidationError(
            "Something is wrong with snpinfo index: "
            "snpinfo index[u] should == u for values u in snpinfo index"
        )


def snpinfo_to_map(snpinfo: Union[SNPInfo, pd.DataFrame]) -> SNPMap:
    """Build the per-chromosome map of distinct SNPs

    Chromosomes keep their order of first appearance. Within a chromosome
    there is one entry per distinct index, in order of first appearance,
    taking position and label from the first SNP carrying that index.

    Args:
        snpinfo: SNP annotation with chr, pos, snp and index columns

    Returns:
        Dict of chromosome -> Series of positions indexed by SNP label
    """
    snpinfo = as_snpinfo(snpinfo)
    check_index_range(snpinfo)

    snp_map: SNPMap = {}
    for chrom, rows in snpinfo.split_by_chromosome().items():
        first = rows.drop_duplicates(subset='index', keep='first')
        snp_map[chrom] = pd.Series(
            first['pos'].to_numpy(dtype=np.float64),
            index=pd.Index(first['snp'].to_numpy(), name='snp'),
            name='pos',
        )
    return snp_map


def rev_snp_index(snpinfo: Union[SNPInfo, pd.DataFrame]) -> np.ndarray:
    """Row of the distinct-SNP results that each SNP takes its LOD from

    Distinct index values are ranked by first appearance (matching the
    order used by snpinfo_to_map) and every SNP receives the rank of its
    index. Ranks are 0-based, for use with iloc.
    """
    index = snpinfo['index'] if isinstance(snpinfo, pd.DataFrame) else snpinfo.index
    codes, _ = pd.factorize(np.asarray(index))
    return codes


def expand_snp_results(snp_results: pd.DataFrame,
                       snp_map: SNPMap,
                       snpinfo: Union[SNPInfo, pd.DataFrame]) -> Tuple[pd.DataFrame, SNPMap]:
    """Expand distinct-SNP results to one row per SNP

    Args:
        snp_results: LOD scores, one row per distinct SNP, rows ordered as
            the concatenated entries of snp_map
        snp_map: Map of distinct SNPs from snpinfo_to_map
        snpinfo: Full SNP annotation

    Returns:
        Tuple of (LOD scores indexed by SNP identifier, map with every SNP)

    Raises:
        LengthMismatchError: if map, annotation and results disagree in size
    """
    snpinfo = as_snpinfo(snpinfo)
    by_chr = snpinfo.split_by_chromosome()

    if len(snp_map) != len(by_chr):
        raise LengthMismatchError(f"length(map) [{len(snp_map)}] != length(snpinfo) [{len(by_chr)}]")

    sizes = [len(positions) for positions in snp_map.values()]
    n_map = int(np.sum(sizes))
    if len(snp_results) != n_map:
        raise LengthMismatchError(
            f"nrow(snp_results) [{len(snp_results)}] != length(unlist(map)) [{n_map}]"
        )

    starts = np.concatenate([[0], np.cumsum(sizes)]).astype(int)

    blocks = []
    expanded_map: SNPMap = {}
    for (chrom, positions), start, end in zip(snp_map.items(), starts[:-1], starts[1:]):
        if chrom not in by_chr:
            raise ValidationError(f"Chromosome {chrom} in map not found in snpinfo")
        rows = by_chr[chrom]

        revindex = rev_snp_index(rows)
        n_classes = int(revindex.max()) + 1 if len(revindex) else 0
        if n_classes != len(positions):
            raise LengthMismatchError(
                f"length(map[{chrom}]) [{len(positions)}] != distinct SNPs on chromosome [{n_classes}]"
            )

        snp_ids = pd.Index(rows['snp'].to_numpy(), name='snp')
        block = snp_results.iloc[start:end].iloc[revindex].copy()
        block.index = snp_ids
        blocks.append(block)

        expanded_map[chrom] = pd.Series(rows['pos'].to_numpy(dtype=np.float64), index=snp_ids, name='pos')

    if blocks:
        result = pd.concat(blocks)
    else:
        result = snp_results.iloc[0:0].copy()
        result.index = pd.Index([], name='snp')
    return result, expanded_map
