"""
Core data structures for snpasso package
"""

import warnings
import numpy as np
import pandas as pd
from typing import Optional, Union, Dict, Any, List
from pathlib import Path

# Per-chromosome map: chromosome label -> positions indexed by SNP label
SNPMap = Dict[Any, pd.Series]


class SNPInfo:
    """SNP annotation with equivalence-class indices

    Expected columns: [chr, pos, sdp, snp, index, intervals, on_map]
    Only chr, pos and index are required; snp falls back to the row labels.
    """

    REQUIRED_COLUMNS = ['chr', 'pos', 'index']
    OPTIONAL_COLUMNS = ['sdp', 'intervals', 'on_map']

    def __init__(self, data: Union[pd.DataFrame, str, Path], metadata: Optional[Dict[str, Any]] = None):
        if isinstance(data, (str, Path)):
            self.data = pd.read_csv(data)
        elif isinstance(data, pd.DataFrame):
            self.data = data.copy()
        else:
            raise ValueError("Data must be DataFrame or file path")

        self.metadata: Dict[str, Any] = dict(metadata) if metadata else {}

        for col in self.REQUIRED_COLUMNS:
            if col not in self.data.columns:
                raise ValueError(f"Missing required column: {col}")

        if 'snp' not in self.data.columns:
            warnings.warn("snpinfo has no 'snp' column; using row labels as SNP identifiers")
            self.data['snp'] = self.data.index.astype(str)

        if self.data['chr'].isna().any():
            raise ValueError("snpinfo has missing chromosome labels")

        index = pd.to_numeric(self.data['index'], errors='coerce').to_numpy(dtype=np.float64)
        if np.any(np.isnan(index)) or np.any(index != np.floor(index)):
            raise ValueError("snpinfo index values must be integers")
        self.data['index'] = index.astype(np.int64)
        self.data['pos'] = self.data['pos'].astype(np.float64)
        self.data = self.data.reset_index(drop=True)

    @property
    def chromosomes(self) -> pd.Series:
        """Chromosome labels, categorical dtype flattened to plain values"""
        return self.data['chr'].astype(object)

    @property
    def positions(self) -> pd.Series:
        """SNP positions in map units"""
        return self.data['pos']

    @property
    def snp_ids(self) -> pd.Series:
        """SNP identifiers"""
        return self.data['snp']

    @property
    def index(self) -> pd.Series:
        """Equivalence-class indices (1-based)"""
        return self.data['index']

    @property
    def n_snps(self) -> int:
        """Number of SNPs"""
        return len(self.data)

    @property
    def n_distinct(self) -> int:
        """Number of distinct equivalence classes"""
        return int(self.data['index'].nunique())

    def split_by_chromosome(self) -> Dict[Any, pd.DataFrame]:
        """Split rows by chromosome, in order of first appearance"""
        return {
            chrom: rows
            for chrom, rows in self.data.groupby(self.chromosomes, sort=False)
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to pandas DataFrame"""
        return self.data.copy()

    def with_metadata(self, **metadata: Any) -> "SNPInfo":
        """Return a new SNPInfo with merged metadata dictionary."""
        merged = dict(self.metadata)
        merged.update(metadata)
        return SNPInfo(self.data.copy(), metadata=merged)


class ScanResults:
    """LOD scores from a SNP association scan

    One row per tested SNP (or per distinct SNP class when the scan ran on
    compressed SNP probabilities), one column per phenotype.
    """

    def __init__(self, lod: Union[pd.DataFrame, np.ndarray],
                 snpinfo: Optional[SNPInfo] = None,
                 lod_columns: Optional[List[str]] = None):

        if isinstance(lod, pd.DataFrame):
            self.lod = lod.copy()
        elif isinstance(lod, np.ndarray):
            values = lod.reshape(-1, 1) if lod.ndim == 1 else lod
            if values.ndim != 2:
                raise ValueError("LOD array must be 1D or 2D")
            self.lod = pd.DataFrame(values)
        else:
            raise ValueError("LOD scores must be DataFrame or array")

        if lod_columns is not None:
            if len(lod_columns) != self.lod.shape[1]:
                raise ValueError(
                    f"Got {len(lod_columns)} column names for {self.lod.shape[1]} LOD columns"
                )
            self.lod.columns = lod_columns
        elif not isinstance(lod, pd.DataFrame):
            self.lod.columns = [f"lod{i + 1}" for i in range(self.lod.shape[1])]

        if self.lod.shape[1] == 0:
            raise ValueError("Scan results must have at least one LOD column")

        self.snpinfo = snpinfo

    @property
    def n_rows(self) -> int:
        """Number of result rows"""
        return len(self.lod)

    @property
    def lod_columns(self) -> List[str]:
        """Names of the LOD columns"""
        return list(self.lod.columns)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to pandas DataFrame"""
        return self.lod.copy()

    def to_numpy(self) -> np.ndarray:
        """Convert to numpy array of LOD scores"""
        return self.lod.to_numpy(dtype=np.float64)

    def plot(self, snpinfo: Optional[SNPInfo] = None, **kwargs):
        """Plot with plot_snpasso using the given or attached annotation"""
        from ..visualization.manhattan import plot_snpasso

        snpinfo = snpinfo if snpinfo is not None else self.snpinfo
        if snpinfo is None:
            raise ValueError("SNP annotation required to plot SNP association results")
        return plot_snpasso(self, snpinfo, **kwargs)


def as_lod_frame(scan1output: Union[ScanResults, pd.DataFrame, np.ndarray]) -> pd.DataFrame:
    """Return LOD scores as a DataFrame regardless of input container"""
    if isinstance(scan1output, ScanResults):
        return scan1output.to_dataframe()
    if isinstance(scan1output, (pd.DataFrame, np.ndarray)):
        return ScanResults(scan1output).to_dataframe()
    raise ValueError("Scan results must be ScanResults, DataFrame, or array")


def as_snpinfo(snpinfo: Union[SNPInfo, pd.DataFrame]) -> SNPInfo:
    """Wrap a DataFrame annotation in SNPInfo"""
    if isinstance(snpinfo, SNPInfo):
        return snpinfo
    return SNPInfo(snpinfo)


def map_to_frame(snp_map: SNPMap) -> pd.DataFrame:
    """Flatten a per-chromosome map to rows [snp, chr, pos] in map order"""
    frames = [
        pd.DataFrame({
            'snp': positions.index.to_numpy(),
            'chr': [chrom] * len(positions),
            'pos': positions.to_numpy(dtype=np.float64),
        })
        for chrom, positions in snp_map.items()
    ]
    if not frames:
        return pd.DataFrame({'snp': [], 'chr': [], 'pos': []})
    return pd.concat(frames, ignore_index=True)
