"""
TalentMatch: candidate-job AI match scoring.

Combines embedding-based semantic similarity with skill and experience
heuristics into a single 0-100 match score.
"""

from talentmatch.utils.constants import APP_DISPLAY_NAME, VERSION

__version__ = VERSION
__app_name__ = APP_DISPLAY_NAME
