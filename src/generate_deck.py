#!/usr/bin/env python3
"""
Script to assemble markdown slide files into a reveal.js presentation.
This is a thin wrapper around the revealdeck package.
"""

import sys
from revealdeck.cli import main

if __name__ == '__main__':
    sys.exit(main())
