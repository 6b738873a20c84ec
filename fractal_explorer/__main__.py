"""
Allow running the package directly: python -m fractal_explorer
"""
import sys

from .app import main

sys.exit(main())
