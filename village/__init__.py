"""
Village Raid — build a village, train barbarians, raid goblins.
"""

__version__ = "0.1.0"
