"""
Command line driver: load snpinfo and scan results, write plots and tables
"""

from pathlib import Path
from typing import List, Optional, Dict

import matplotlib.pyplot as plt

from .utils import parse_args, normalize_outputs
from ..data.loaders import load_snpinfo_file, load_scan_results_file
from ..data.io_utils import save_expanded_results
from ..utils.data_types import ScanResults
from ..visualization.manhattan import SNPASSO_Report


def main(argv: Optional[List[str]] = None) -> Dict:
    args = parse_args(argv)
    verbose = not args.quiet
    outputs = normalize_outputs(args.outputs)

    output_dir = Path(args.outputdir)
    output_dir.mkdir(parents=True, exist_ok=True)
    prefix = str(output_dir / args.output_prefix)

    snpinfo = load_snpinfo_file(args.snpinfo)
    scan = load_scan_results_file(args.scan)

    if verbose:
        print(f"Loaded {snpinfo.n_snps} SNPs ({snpinfo.n_distinct} distinct) "
              f"and {scan.n_rows} scan result rows")

    if args.lodcolumn is not None:
        if args.lodcolumn not in scan.lod_columns:
            raise ValueError(f"LOD column not found: {args.lodcolumn}")
        # plotted column goes first
        others = [c for c in scan.lod_columns if c != args.lodcolumn]
        scan = ScanResults(scan.lod[[args.lodcolumn] + others], snpinfo=snpinfo)

    plot_types = [o for o in outputs if o in ('manhattan', 'lod_density')]
    report = SNPASSO_Report(
        scan,
        snpinfo,
        show_all_snps=not args.distinct_only,
        drop_hilit=args.drop_hilit,
        plot_types=plot_types,
        output_prefix=prefix,
        dpi=args.dpi,
        figsize=tuple(args.figsize),
        verbose=verbose,
        save_plots=True,
        col=args.col,
        col_hilit=args.col_hilit,
        gap=args.gap,
        ylim=tuple(args.ylim) if args.ylim else None,
        point_size=args.point_size,
    )

    if 'expanded_lod' in outputs:
        filename = f"{prefix}_lod.tsv"
        save_expanded_results(report['lod'], report['map'], filename)
        report['files_created'].append(filename)

    if 'top_snps' in outputs:
        filename = f"{prefix}_top_snps.tsv"
        report['top_snps'].to_csv(filename, sep='\t', index=False)
        report['files_created'].append(filename)

    for fig in report['plots'].values():
        plt.close(fig)

    if verbose:
        print(f"Wrote {len(report['files_created'])} files to {output_dir}")

    return report
