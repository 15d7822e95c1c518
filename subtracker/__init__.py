"""
Subscription Tracker - Source Package

Keeps a running list of recurring services and what they cost
per month, per year and over five years.

DESIGN PRINCIPLES:
1. Invalid entries never enter the ledger
2. Fail early, fail visibly
3. No silent corrections
4. Every user action is auditable
5. Nothing outlives the session
"""

__version__ = "1.0.0"
__author__ = "Subscription Tracker Team"
