"""
Machine Learning modules for TalentMatch.

Submodules:
- embeddings: Text embedding providers and vector similarity
"""
