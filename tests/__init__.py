"""
Test Suite for the Stock Correlation Workbench

Package-level tests live beside each package (analysis/tests,
ingestion/tests, reports/tests). This directory holds CLI tests.
"""
