"""
CreditWise - Alternative Credit Score Service

A FastAPI-based service that scores informal-economy workers from their
transaction history and produces persisted, downloadable credit reports.
"""

__version__ = "0.1.0"
