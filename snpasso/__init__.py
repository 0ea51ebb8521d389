"""
snpasso: SNP association plots for QTL scans on SNP probabilities

Plots LOD scores from SNP association scans across chromosomes, expanding
results computed once per equivalence class of SNPs back onto every SNP.
Based on the plot_snpasso design from R/qtl2.
"""

__version__ = "0.1.0"
__author__ = "snpasso Development Team"

from .utils.data_types import SNPInfo, ScanResults
from .utils.exceptions import (
    SNPAssoError,
    ValidationError,
    LengthMismatchError,
    OutOfRangeError,
    EmptyDataError,
)
from .association.snp_index import snpinfo_to_map, rev_snp_index, expand_snp_results
from .visualization.manhattan import plot_snpasso, plot_scan1, SNPASSO_Report

__all__ = [
    'SNPInfo',
    'ScanResults',
    'SNPAssoError',
    'ValidationError',
    'LengthMismatchError',
    'OutOfRangeError',
    'EmptyDataError',
    'snpinfo_to_map',
    'rev_snp_index',
    'expand_snp_results',
    'plot_snpasso',
    'plot_scan1',
    'SNPASSO_Report'
]
