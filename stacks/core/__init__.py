#!/usr/bin/env python

"""
    Core module for Stacks, db & circulation rules

    :copyright: (c) 2015 by AUTHORS
    :license: see LICENSE for more details
"""

from stacks.core import db as database
from stacks.core import models

database.init()

__all__ = ["database", "models"]
