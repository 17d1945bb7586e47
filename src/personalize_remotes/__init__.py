# -*- coding: utf-8 -*-
"""
Rewire the remotes of local clones to point at your own GitHub copies.
"""

__version__ = "0.1.0"
