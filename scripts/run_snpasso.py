#!/usr/bin/env python3
"""
SNP association plot script using snpasso
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from snpasso.cli.run import main

if __name__ == "__main__":
    main()
