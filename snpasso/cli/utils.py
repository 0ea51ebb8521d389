import argparse
from typing import List, Optional

OUTPUT_CHOICES = (
    'manhattan',
    'lod_density',
    'expanded_lod',
    'top_snps',
)

def normalize_outputs(outputs: List[str]) -> List[str]:
    """Helper to normalize output choices"""
    if not outputs:
        return list(OUTPUT_CHOICES)
    valid = []
    for o in outputs:
        o = o.strip().lower()
        if o in OUTPUT_CHOICES and o not in valid:
            valid.append(o)
    return valid if valid else list(OUTPUT_CHOICES)

def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments for SNP association plotting"""
    parser = argparse.ArgumentParser(
        description="Plot SNP association LOD scores, expanding distinct SNPs to all SNPs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Required arguments
    parser.add_argument("--snpinfo", "-s", required=True,
                       help="SNP annotation file (CSV/TSV with chr, pos, snp, index columns)")
    parser.add_argument("--scan", "-l", required=True,
                       help="Scan results file (CSV/TSV, one row per distinct SNP)")

    # Optional arguments
    parser.add_argument("--outputdir", "-o", default="./snpasso_results",
                       help="Output directory")
    parser.add_argument("--output-prefix", default="snpasso",
                       help="Prefix for output file names")
    parser.add_argument("--lodcolumn", default=None,
                       help="LOD column to plot (default: first LOD column)")
    parser.add_argument("--distinct-only", action='store_true',
                       help="Plot only distinct SNPs instead of expanding to all SNPs")

    # Highlighting and layout
    parser.add_argument("--drop-hilit", type=float, default=None,
                       help="Highlight SNPs with LOD within this amount of the maximum")
    parser.add_argument("--col", default="darkslateblue",
                       help="Color of points")
    parser.add_argument("--col-hilit", default="#D02090",
                       help="Color of highlighted points")
    parser.add_argument("--gap", type=float, default=25.0,
                       help="Gap between chromosomes (map units)")
    parser.add_argument("--ylim", type=float, nargs=2, default=None,
                       metavar=('YMIN', 'YMAX'),
                       help="y-axis limits")
    parser.add_argument("--point-size", type=float, default=8.0,
                       help="Point size")
    parser.add_argument("--dpi", type=int, default=300,
                       help="Plot resolution")
    parser.add_argument("--figsize", type=float, nargs=2, default=[12.0, 4.0],
                       metavar=('WIDTH', 'HEIGHT'),
                       help="Figure size in inches")

    # Output
    parser.add_argument("--outputs", nargs='+',
                       choices=list(OUTPUT_CHOICES),
                       default=list(OUTPUT_CHOICES),
                       help="Outputs to generate")
    parser.add_argument("--quiet", "-q", action='store_true',
                       help="Suppress progress messages")

    return parser.parse_args(argv)
