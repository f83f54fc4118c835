#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render an A4 sheet of git command barcodes to git-barcode-sheet-a4.png.
"""

# local repo modules
import git_barcode_sheet.cli


if __name__ == "__main__":
	git_barcode_sheet.cli.main()
