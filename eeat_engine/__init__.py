"""
E-E-A-T Content Quality Engine

A scoring library for AI-written marketing content that:
1. Extracts and grades citations from article HTML
2. Detects first-hand experience, expertise, authority and trust signals
3. Aggregates them into a weighted E-E-A-T score with a letter grade
4. Clusters keyword batches into topic groups
5. Flags near-duplicate topics before an article is generated
"""

__version__ = "0.1.0"
