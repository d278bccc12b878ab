"""
Cardiac Triage Service

Rule-based cardiovascular risk triage with assessment history analytics.
"""

__version__ = "1.0.0"
