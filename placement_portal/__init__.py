"""
Campus Placement Portal
Students register and browse placement drives; teachers post drives
and export the student roster.

Architecture:
- MongoDB: students, teachers, placements, sessions
- FastAPI: session-gated HTTP handlers
"""

__version__ = "1.0.0"
