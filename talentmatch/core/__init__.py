"""
Core business logic modules for TalentMatch.

Submodules:
- exceptions: Errors raised by the scoring pipeline
- matching: Skill/experience heuristics, the matching engine and match service
"""
