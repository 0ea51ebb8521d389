"""
Equivalence-class handling for SNP association results
"""

from .snp_index import snpinfo_to_map, rev_snp_index, expand_snp_results, validate_snp_index

__all__ = ['snpinfo_to_map', 'rev_snp_index', 'expand_snp_results', 'validate_snp_index']
