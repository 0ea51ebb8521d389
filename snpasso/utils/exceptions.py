"""
Error types raised while validating and expanding SNP association results
"""


class SNPAssoError(ValueError):
    """Base class for snpasso errors"""


class ValidationError(SNPAssoError):
    """Scan results are inconsistent with the SNP annotation index"""


class LengthMismatchError(SNPAssoError):
    """Map, annotation or result table lengths disagree"""


class OutOfRangeError(SNPAssoError):
    """An equivalence-class index falls outside [1, number of SNPs]"""


class EmptyDataError(SNPAssoError):
    """No non-missing LOD scores are available"""
