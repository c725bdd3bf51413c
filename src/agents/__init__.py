"""
Agent implementations for ReviewLens.

Contains all agent modules that process reviews through the pipeline:
- Ingestion Agent
- Review Normalizer (with Sentiment and Tag Classifiers)
- Review Filters
- Review Aggregator
- Report Generator
"""
