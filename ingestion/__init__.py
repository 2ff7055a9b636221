"""
Data Ingestion Module

Handles fetching and validating data from external sources:
- Stock price service for instrument listings and price history
"""

__version__ = "0.1.0"
