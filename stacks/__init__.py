#!/usr/bin/env python

"""
    Stacks, a circulation API for small libraries

    :copyright: (c) 2015 by AUTHORS
    :license: see LICENSE for more details
"""

__version__ = "0.1.0"
