"""
Core domain layer: triage scoring, input validation and history analytics.
"""
