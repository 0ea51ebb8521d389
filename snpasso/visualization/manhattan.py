"""
Manhattan-style plots of SNP association LOD scores
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.colors import is_color_like, to_hex
from typing import Optional, Union, Dict, List, Tuple, Sequence, Any

from ..utils.data_types import SNPInfo, ScanResults, SNPMap, as_lod_frame, as_snpinfo
from ..utils.exceptions import LengthMismatchError
from ..utils.stats import max_lod, is_unset, highlight_mask, assign_highlight_colors, top_snps
from ..association.snp_index import validate_snp_index, snpinfo_to_map, expand_snp_results

# R's gray90 / gray85
DEFAULT_BGCOLOR = '#E5E5E5'
DEFAULT_ALTBGCOLOR = '#D9D9D9'
DEFAULT_COL = 'darkslateblue'
DEFAULT_COL_HILIT = '#D02090'  # violetred


def _lod_column_name(lod: pd.DataFrame, lodcolumn: Union[int, str]):
    if isinstance(lodcolumn, (int, np.integer)):
        if not 0 <= lodcolumn < lod.shape[1]:
            raise ValueError(f"lodcolumn {lodcolumn} out of range for {lod.shape[1]} LOD columns")
        return lod.columns[lodcolumn]
    if lodcolumn not in lod.columns:
        raise ValueError(f"LOD column not found: {lodcolumn}")
    return lodcolumn


def plot_scan1(ax, lod: pd.DataFrame, snp_map: SNPMap,
               lodcolumn: Union[int, str] = 0,
               ylim: Optional[Tuple[float, float]] = None,
               gap: float = 25.0,
               bgcolor: str = DEFAULT_BGCOLOR,
               altbgcolor: str = DEFAULT_ALTBGCOLOR,
               col: Union[str, Sequence[str]] = DEFAULT_COL,
               marker: str = 'o',
               point_size: float = 8.0,
               add: bool = False,
               type: str = 'p',
               xlab: str = 'Chromosome',
               ylab: str = 'LOD score',
               **kwargs) -> np.ndarray:
    """Plot LOD scores against map position, chromosomes side by side

    Rows of lod are matched to the concatenated map entries by position.

    Args:
        ax: matplotlib Axes to draw on
        lod: LOD scores
        snp_map: Per-chromosome map, positions indexed by SNP label
        lodcolumn: LOD column position or name
        ylim: y-axis limits
        gap: Gap between chromosomes, in map units
        bgcolor: Background color for the plot
        altbgcolor: Background color for alternate chromosomes
        col: Point color, or one color per row
        marker: matplotlib marker
        point_size: Point size
        add: Only add points to an existing plot (no background, axes, limits)
        type: 'p' for points, 'l' for lines
        xlab: x-axis label
        ylab: y-axis label
        **kwargs: Passed on to Axes.scatter / Axes.plot

    Returns:
        x coordinate of every row of lod
    """
    if type not in ('p', 'l'):
        raise ValueError(f"Unknown plot type '{type}', expected 'p' or 'l'")

    column = _lod_column_name(lod, lodcolumn)
    values = lod[column].to_numpy(dtype=np.float64)

    sizes = [len(positions) for positions in snp_map.values()]
    n_map = int(np.sum(sizes))
    if len(values) != n_map:
        raise LengthMismatchError(f"nrow(lod) [{len(values)}] != length(unlist(map)) [{n_map}]")

    per_row_colors = not is_color_like(col)
    if per_row_colors and len(col) != n_map:
        raise LengthMismatchError(f"length(col) [{len(col)}] != nrow(lod) [{n_map}]")
    if not per_row_colors:
        # an RGB tuple passed as scatter c= is read as values when it matches the point count
        col = to_hex(col, keep_alpha=True)

    xpos = np.zeros(n_map, dtype=np.float64)
    tick_positions = []
    tick_labels = []

    current_pos = gap / 2
    start = 0
    for i, (chrom, positions) in enumerate(snp_map.items()):
        end = start + len(positions)
        if end == start:
            continue

        chrom_pos = positions.to_numpy(dtype=np.float64)
        min_pos = np.nanmin(chrom_pos)
        chrom_length = np.nanmax(chrom_pos) - min_pos

        chrom_x = current_pos + (chrom_pos - min_pos)
        xpos[start:end] = chrom_x

        if not add:
            ax.axvspan(current_pos - gap / 2, current_pos + chrom_length + gap / 2,
                       color=bgcolor if i % 2 == 0 else altbgcolor,
                       linewidth=0, zorder=0)

        chrom_lod = values[start:end]
        chrom_col = list(col[start:end]) if per_row_colors else col
        if type == 'p':
            ax.scatter(chrom_x, chrom_lod, c=chrom_col, s=point_size, marker=marker,
                       edgecolors='none', zorder=2, **kwargs)
        else:
            order = np.argsort(chrom_x, kind='mergesort')
            line_col = chrom_col[0] if per_row_colors else chrom_col
            ax.plot(chrom_x[order], chrom_lod[order], color=line_col, zorder=2, **kwargs)

        tick_positions.append(current_pos + chrom_length / 2)
        tick_labels.append(str(chrom))

        current_pos += chrom_length + gap
        start = end

    if not add:
        ax.set_xlim(0, current_pos - gap / 2)
        if ylim is not None:
            ax.set_ylim(*ylim)
        ax.set_xticks(tick_positions)
        ax.set_xticklabels(tick_labels)
        ax.set_xlabel(xlab, fontsize=12)
        ax.set_ylabel(ylab, fontsize=12)
        ax.tick_params(axis='x', length=0)

    return xpos


def prepare_snpasso(scan1output: Union[ScanResults, pd.DataFrame, np.ndarray],
                    snpinfo: Union[SNPInfo, pd.DataFrame],
                    show_all_snps: bool = True) -> Tuple[pd.DataFrame, SNPMap]:
    """Validate scan results against snpinfo and build the plotting inputs

    Returns:
        Tuple of (LOD scores, per-chromosome map), expanded to all SNPs
        when show_all_snps is True
    """
    lod = as_lod_frame(scan1output)
    snpinfo = as_snpinfo(snpinfo)

    validate_snp_index(snpinfo, len(lod))

    snp_map = snpinfo_to_map(snpinfo)

    if show_all_snps:
        lod, snp_map = expand_snp_results(lod, snp_map, snpinfo)

    return lod, snp_map


def _draw_snpasso(lod: pd.DataFrame, snp_map: SNPMap,
                  drop_hilit: Optional[float],
                  col_hilit: str,
                  col: Union[str, Sequence[str]],
                  ylim: Optional[Tuple[float, float]],
                  add: bool,
                  ax,
                  figsize: Tuple[float, float],
                  **kwargs) -> plt.Figure:
    maxlod = max_lod(lod.iloc[:, 0])

    if ylim is None:
        ylim = (0, maxlod * 1.02)

    colors = assign_highlight_colors(lod.iloc[:, 0], maxlod, drop_hilit, col=col, col_hilit=col_hilit)

    if ax is None:
        if add:
            ax = plt.gca()
        else:
            _, ax = plt.subplots(figsize=figsize)

    plot_scan1(ax, lod, snp_map, lodcolumn=0, ylim=ylim, col=colors, add=add, **kwargs)

    if not add:
        ax.figure.tight_layout()
    return ax.figure


def plot_snpasso(scan1output: Union[ScanResults, pd.DataFrame, np.ndarray],
                 snpinfo: Union[SNPInfo, pd.DataFrame],
                 show_all_snps: bool = True,
                 drop_hilit: Optional[float] = None,
                 col_hilit: str = DEFAULT_COL_HILIT,
                 col: Union[str, Sequence[str]] = DEFAULT_COL,
                 marker: str = 'o',
                 point_size: float = 8.0,
                 ylim: Optional[Tuple[float, float]] = None,
                 add: bool = False,
                 gap: float = 25.0,
                 bgcolor: str = DEFAULT_BGCOLOR,
                 altbgcolor: str = DEFAULT_ALTBGCOLOR,
                 ax=None,
                 figsize: Tuple[float, float] = (12, 4),
                 **kwargs) -> plt.Figure:
    """Plot SNP associations, with possible expansion from distinct SNPs to all SNPs

    Args:
        scan1output: LOD scores from a scan on SNP probabilities, one row per
            distinct SNP (equivalence class), first column plotted
        snpinfo: SNP annotation with chr, pos, snp and index columns
        show_all_snps: If True, expand to show all SNPs
        drop_hilit: SNPs with LOD within this amount of the maximum are
            highlighted (None or NaN to skip)
        col_hilit: Color of highlighted points
        col: Color of other points, or one color per plotted SNP
        marker: matplotlib marker for the points
        point_size: Size of the points
        ylim: y-axis limits (default 0 to 1.02 * maximum LOD)
        add: If True, add to an existing plot with the same map
        gap: Gap between chromosomes
        bgcolor: Background color for the plot
        altbgcolor: Background color for alternate chromosomes
        ax: Axes to draw on (new figure when None)
        figsize: Figure size when a new figure is created
        **kwargs: Additional matplotlib parameters for the points

    Returns:
        matplotlib Figure object
    """
    lod, snp_map = prepare_snpasso(scan1output, snpinfo, show_all_snps=show_all_snps)

    return _draw_snpasso(
        lod, snp_map,
        drop_hilit=drop_hilit, col_hilit=col_hilit, col=col, ylim=ylim,
        add=add, ax=ax, figsize=figsize,
        marker=marker, point_size=point_size, gap=gap,
        bgcolor=bgcolor, altbgcolor=altbgcolor, type='p',
        **kwargs
    )


def create_lod_density_plot(lod: np.ndarray,
                            title: str = "LOD Score Distribution",
                            figsize: Tuple[int, int] = (6, 4)) -> plt.Figure:
    """Create histogram of LOD scores

    Args:
        lod: Array of LOD scores
        title: Plot title
        figsize: Figure size

    Returns:
        matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    values = np.asarray(lod, dtype=np.float64)
    values = values[~np.isnan(values)]

    if len(values) == 0:
        ax.text(0.5, 0.5, 'No LOD scores', ha='center', va='center', transform=ax.transAxes)
        ax.set_title(title)
        return fig

    sns.histplot(values, bins=50, ax=ax, color='skyblue', edgecolor='black')
    ax.set_xlabel('LOD score')
    ax.set_ylabel('Number of SNPs')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig


def calculate_snpasso_summary(lod: pd.DataFrame,
                              snp_map: SNPMap,
                              snpinfo: Union[SNPInfo, pd.DataFrame],
                              drop_hilit: Optional[float] = None) -> Dict[str, Any]:
    """Summary statistics for plotted SNP association results

    Args:
        lod: LOD scores as plotted (expanded or distinct)
        snp_map: Map matching lod
        snpinfo: SNP annotation
        drop_hilit: Highlight threshold, counted when set

    Returns:
        Dictionary with summary statistics
    """
    snpinfo = as_snpinfo(snpinfo)
    values = lod.iloc[:, 0].to_numpy(dtype=np.float64)
    maxlod = max_lod(values)

    best = top_snps(lod, snp_map, drop=0.0).iloc[0]

    n_highlighted = None
    if not is_unset(drop_hilit):
        n_highlighted = int(np.sum(highlight_mask(values, maxlod, drop_hilit)))

    return {
        'n_snps': len(lod),
        'n_distinct': snpinfo.n_distinct,
        'n_chromosomes': len(snp_map),
        'max_lod': maxlod,
        'top_snp': best['snp'],
        'top_chr': best['chr'],
        'top_pos': float(best['pos']),
        'n_highlighted': n_highlighted,
    }


def SNPASSO_Report(scan1output: Union[ScanResults, pd.DataFrame, np.ndarray],
                   snpinfo: Union[SNPInfo, pd.DataFrame],
                   show_all_snps: bool = True,
                   drop_hilit: Optional[float] = 1.5,
                   plot_types: List[str] = ["manhattan", "lod_density"],
                   output_prefix: str = "snpasso_results",
                   dpi: int = 300,
                   figsize: Tuple[int, int] = (12, 4),
                   verbose: bool = True,
                   save_plots: bool = True,
                   **plot_kwargs) -> Dict:
    """Generate SNP association plots and summary

    Args:
        scan1output: LOD scores, one row per distinct SNP
        snpinfo: SNP annotation
        show_all_snps: Expand to all SNPs before plotting
        drop_hilit: Highlight SNPs within this LOD of the maximum
        plot_types: Types of plots to generate ["manhattan", "lod_density"]
        output_prefix: Prefix for output files
        dpi: Plot resolution
        figsize: Figure size (width, height)
        verbose: Print progress information
        save_plots: Save plots to files
        **plot_kwargs: Passed on to the manhattan plot

    Returns:
        Dictionary with plots, summary, top SNPs, plotted LOD table and map,
        and files created
    """
    if verbose:
        print("Generating SNP association report...")

    lod, snp_map = prepare_snpasso(scan1output, snpinfo, show_all_snps=show_all_snps)

    if verbose:
        print(f"Plotting {len(lod)} SNPs on {len(snp_map)} chromosomes"
              f"{' (expanded from distinct SNPs)' if show_all_snps else ''}")

    report = {
        'plots': {},
        'summary': calculate_snpasso_summary(lod, snp_map, snpinfo, drop_hilit=drop_hilit),
        'top_snps': top_snps(lod, snp_map, drop=0.0 if is_unset(drop_hilit) else drop_hilit),
        'lod': lod,
        'map': snp_map,
        'files_created': []
    }

    if "manhattan" in plot_types:
        if verbose:
            print("Creating SNP association plot...")
        fig = _draw_snpasso(
            lod, snp_map,
            drop_hilit=drop_hilit,
            col_hilit=plot_kwargs.pop('col_hilit', DEFAULT_COL_HILIT),
            col=plot_kwargs.pop('col', DEFAULT_COL),
            ylim=plot_kwargs.pop('ylim', None),
            add=False, ax=None, figsize=figsize,
            **plot_kwargs
        )
        report['plots']['manhattan'] = fig

        if save_plots:
            filename = f"{output_prefix}_snpasso.png"
            fig.savefig(filename, dpi=dpi, bbox_inches='tight')
            report['files_created'].append(filename)

    if "lod_density" in plot_types:
        if verbose:
            print("Creating LOD density plot...")
        density_fig = create_lod_density_plot(lod.iloc[:, 0].to_numpy(dtype=np.float64))
        report['plots']['lod_density'] = density_fig

        if save_plots:
            filename = f"{output_prefix}_lod_density.png"
            density_fig.savefig(filename, dpi=dpi, bbox_inches='tight')
            report['files_created'].append(filename)

    if verbose:
        summary = report['summary']
        print("Summary:")
        print(f"  SNPs plotted: {summary['n_snps']}")
        print(f"  Distinct SNPs: {summary['n_distinct']}")
        print(f"  Maximum LOD: {summary['max_lod']:.2f} at {summary['top_snp']} "
              f"(chr {summary['top_chr']}, pos {summary['top_pos']:.3f})")
        if summary['n_highlighted'] is not None:
            print(f"  Highlighted SNPs: {summary['n_highlighted']}")
        print(f"Report generation complete. Created {len(report['files_created'])} plot files.")

    return report
