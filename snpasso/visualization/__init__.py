"""
Plotting of SNP association results
"""

from .manhattan import plot_snpasso, plot_scan1, SNPASSO_Report

__all__ = ['plot_snpasso', 'plot_scan1', 'SNPASSO_Report']
