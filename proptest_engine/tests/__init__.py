"""
Test suite for the property testing engine.

Focus areas:
- Probability validation
- Simplify/complicate contract of every value tree
- Weighted union and optional value shrinking
- Replay file parsing, merging and crash recovery
- Fork mode supervision
"""
