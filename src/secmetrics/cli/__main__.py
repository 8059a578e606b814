"""
Allow running secmetricsctl as a module: python -m secmetrics.cli
"""

import sys
from .secmetricsctl import main

if __name__ == "__main__":
    sys.exit(main())
