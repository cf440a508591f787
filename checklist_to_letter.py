#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Print a pasted checklist as four foldable quadrants on one Letter page.
"""

import quadrant_checklist.cli


if __name__ == "__main__":
	quadrant_checklist.cli.main()
