"""
routine-forge: procedural multi-week training routine generator.

Builds goal-driven plans with stable per-day exercise pools, progressive
overload and periodic deload weeks.
"""

__version__ = "0.1.0"
