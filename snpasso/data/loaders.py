"""
Data loading utilities for SNP annotation and scan result files
"""

import warnings
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Union, Optional, List

from ..utils.data_types import SNPInfo, ScanResults

SNPINFO_COLUMN_MAPPING = {
    'Chr': 'chr', 'CHR': 'chr', 'CHROM': 'chr', 'chrom': 'chr', 'chromosome': 'chr',
    'Pos': 'pos', 'POS': 'pos', 'position': 'pos', 'bp': 'pos', 'pos_Mbp': 'pos', 'cM': 'pos',
    'SNP': 'snp', 'snp_id': 'snp', 'marker': 'snp', 'rs': 'snp',
    'SDP': 'sdp', 'Index': 'index', 'INDEX': 'index',
}


def detect_file_format(filepath: Union[str, Path]) -> str:
    """Detect delimited text format based on extension and content

    Args:
        filepath: Path to file

    Returns:
        Detected format: 'csv', 'tsv' or 'unknown'
    """
    filepath = Path(filepath)

    name_lower = filepath.name.lower()
    if name_lower.endswith('.gz'):
        name_lower = name_lower[:-3]
    if name_lower.endswith('.tsv') or name_lower.endswith('.txt'):
        return 'tsv'
    elif name_lower.endswith('.csv'):
        return 'csv'

    try:
        with open(filepath, 'r') as f:
            first_line = f.readline().strip()
    except (OSError, UnicodeDecodeError):
        return 'unknown'

    if '\t' in first_line and ',' not in first_line:
        return 'tsv'
    elif ',' in first_line:
        return 'csv'
    return 'unknown'


def _read_delimited(filepath: Path, **kwargs) -> pd.DataFrame:
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    file_format = detect_file_format(filepath)
    if file_format == 'tsv':
        return pd.read_csv(filepath, sep='\t', **kwargs)
    elif file_format == 'csv':
        return pd.read_csv(filepath, **kwargs)
    return pd.read_csv(filepath, sep=None, engine='python', **kwargs)


def load_snpinfo_file(filepath: Union[str, Path]) -> SNPInfo:
    """Load SNP annotation file

    Args:
        filepath: CSV/TSV with chromosome, position, SNP identifier and
            equivalence-class index columns

    Returns:
        SNPInfo object
    """
    filepath = Path(filepath)
    df = _read_delimited(filepath)

    for old_name, new_name in SNPINFO_COLUMN_MAPPING.items():
        if old_name in df.columns and new_name not in df.columns:
            df = df.rename(columns={old_name: new_name})

    # chromosome labels are categories, never numbers
    if 'chr' in df.columns:
        df['chr'] = df['chr'].astype(str)

    return SNPInfo(df, metadata={'source': str(filepath)})


def load_scan_results_file(filepath: Union[str, Path],
                           index_col: Optional[Union[int, str]] = 0,
                           lod_columns: Optional[List[str]] = None) -> ScanResults:
    """Load SNP scan LOD scores

    Args:
        filepath: CSV/TSV with one row per distinct SNP
        index_col: Column holding row labels (None for no label column)
        lod_columns: LOD columns to keep (default: all numeric columns)

    Returns:
        ScanResults object
    """
    filepath = Path(filepath)
    df = _read_delimited(filepath, index_col=index_col)

    if lod_columns is None:
        lod_columns = [c for c in df.columns if pd.api.types.is_numeric_dtype(df[c])]
        dropped = [c for c in df.columns if c not in lod_columns]
        if dropped:
            warnings.warn(f"Ignoring non-numeric columns in scan results: {dropped}")
    else:
        missing = [c for c in lod_columns if c not in df.columns]
        if missing:
            raise ValueError(f"LOD columns not found in {filepath}: {missing}")

    if not lod_columns:
        raise ValueError(f"No LOD columns found in {filepath}")

    return ScanResults(df[lod_columns].astype(np.float64))
