"""
                ToHome Ordering Core

Cart composition, restaurant availability and checkout eligibility
for the ToHome food-ordering platform.

Author: ToHome Team
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "ToHome Team"
