"""
File I/O utilities for snpasso package
"""

import pandas as pd
from pathlib import Path
from typing import Union

from ..utils.data_types import SNPMap, map_to_frame
from ..utils.exceptions import LengthMismatchError


def snp_results_to_frame(lod: pd.DataFrame, snp_map: SNPMap) -> pd.DataFrame:
    """Combine LOD scores with their map into [snp, chr, pos, <lod columns>]"""
    table = map_to_frame(snp_map)
    if len(table) != len(lod):
        raise LengthMismatchError(f"nrow(lod) [{len(lod)}] != length(unlist(map)) [{len(table)}]")

    lod_values = lod.reset_index(drop=True)
    return pd.concat([table, lod_values], axis=1)


def save_expanded_results(lod: pd.DataFrame, snp_map: SNPMap,
                          output_file: Union[str, Path], sep: str = '\t') -> Path:
    """Save per-SNP LOD scores with chromosome and position

    Args:
        lod: LOD scores aligned with snp_map
        snp_map: Per-chromosome map
        output_file: Output path
        sep: Field separator

    Returns:
        Path written
    """
    output_file = Path(output_file)
    snp_results_to_frame(lod, snp_map).to_csv(output_file, sep=sep, index=False)
    return output_file
