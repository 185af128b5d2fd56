"""
Nexus Manager - Source Package

A small business-management dashboard combining bookkeeping
and human-resources record-keeping over in-memory data.

DESIGN PRINCIPLES:
1. State changes are pure transformations of one BusinessData snapshot
2. Fail early, fail visibly
3. Every state transition is auditable
4. The AI service is optional and never owns data
"""

__version__ = "1.0.0"
__author__ = "Nexus Manager Team"
