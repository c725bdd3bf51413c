"""
Utility modules for ReviewLens.

Cross-cutting concerns:
- Fields: Fuzzy column-name resolution for raw rows
- Dates: Date normalization to canonical timestamps
- Storage: Report and table export
"""
