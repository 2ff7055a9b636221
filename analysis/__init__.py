"""
Analysis Engine Module

Calculates statistics from fetched price series:
- Descriptive statistics (average, sample standard deviation)
- Pearson correlation between instruments
- Correlation matrix across a list of instruments
"""

__version__ = "0.1.0"
