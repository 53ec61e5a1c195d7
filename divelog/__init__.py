"""
Name: Scuba Dive Log API

Responsibilities:
  - Role-gated REST backend for recording scuba dive logs
  - Expose users, roles and logbooks under /api/v1
"""

__version__ = "1.0.0"
