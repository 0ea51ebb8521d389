"""
Statistical utilities for SNP association results
"""

import warnings
import numpy as np
import pandas as pd
from matplotlib.colors import is_color_like
from typing import Optional, Sequence, Union, List

from .data_types import SNPMap, map_to_frame
from .exceptions import EmptyDataError, LengthMismatchError


def max_lod(lod: Union[np.ndarray, pd.Series]) -> float:
    """Maximum LOD score, ignoring missing values

    Args:
        lod: LOD scores for a single phenotype

    Returns:
        Largest non-missing LOD score

    Raises:
        EmptyDataError: if every value is missing
    """
    values = np.asarray(lod, dtype=np.float64)
    valid = values[~np.isnan(values)]
    if valid.size == 0:
        raise EmptyDataError("No non-missing LOD scores to compute maximum")
    return float(np.max(valid))


def is_unset(drop_hilit: Optional[float]) -> bool:
    """True when a highlight threshold was not supplied (None or NaN)"""
    if drop_hilit is None:
        return True
    try:
        return bool(np.isnan(drop_hilit))
    except TypeError:
        return False


def highlight_mask(lod: Union[np.ndarray, pd.Series], maxlod: float, drop_hilit: float) -> np.ndarray:
    """Flag SNPs whose LOD is within drop_hilit of maxlod

    Missing LOD scores are never flagged.
    """
    values = np.asarray(lod, dtype=np.float64)
    if drop_hilit < 0:
        warnings.warn(f"Negative drop_hilit ({drop_hilit}) highlights no SNPs")
    with np.errstate(invalid='ignore'):
        return values >= maxlod - drop_hilit


def assign_highlight_colors(lod: Union[np.ndarray, pd.Series],
                            maxlod: float,
                            drop_hilit: Optional[float],
                            col: Union[str, Sequence[str]] = "darkslateblue",
                            col_hilit: str = "#D02090") -> Union[str, List[str]]:
    """Per-SNP colors with highlighted SNPs recolored

    Args:
        lod: LOD scores used for highlighting
        maxlod: Maximum LOD score
        drop_hilit: Highlight SNPs within this amount of maxlod (None/NaN to skip)
        col: Base color, or one color per SNP
        col_hilit: Color for highlighted SNPs

    Returns:
        col unchanged when drop_hilit is unset, otherwise a list with one
        color per SNP
    """
    if is_unset(drop_hilit):
        return col

    n = len(lod)
    if is_color_like(col):
        base = [col] * n
    else:
        base = list(col)
        if len(base) != n:
            raise LengthMismatchError(f"length(col) [{len(base)}] != number of SNPs [{n}]")

    mask = highlight_mask(lod, maxlod, drop_hilit)
    return [col_hilit if flagged else color for flagged, color in zip(mask, base)]


def top_snps(lod: pd.DataFrame,
             snp_map: SNPMap,
             drop: float = 1.5,
             lodcolumn: Union[int, str] = 0) -> pd.DataFrame:
    """SNPs with LOD within drop of the maximum

    Args:
        lod: LOD scores, rows aligned with the concatenated map entries
        snp_map: Per-chromosome map matching lod
        drop: LOD drop from the maximum
        lodcolumn: Column position or name to rank by

    Returns:
        DataFrame [snp, chr, pos, lod] sorted by decreasing LOD
    """
    column = lod.columns[lodcolumn] if isinstance(lodcolumn, (int, np.integer)) else lodcolumn
    values = lod[column].to_numpy(dtype=np.float64)

    table = map_to_frame(snp_map)
    if len(table) != len(values):
        raise LengthMismatchError(f"nrow(lod) [{len(values)}] != length(unlist(map)) [{len(table)}]")

    table['lod'] = values
    keep = highlight_mask(values, max_lod(values), drop)
    table = table[keep]
    return table.sort_values('lod', ascending=False, kind='mergesort').reset_index(drop=True)
