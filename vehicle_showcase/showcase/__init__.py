"""
Adaptive vehicle showcase engine.

Responsibilities:
- Normalize partial vehicle listings into comparable entities.
- Pick a display strategy (tier) from the number of candidates.
- Score and rank vehicles with the tier's weighted priority rules.
- Split the ranking into featured / grid / hidden slices and derive display copy.
"""
