"""
Yoom workflow core.

Framework detection and rule composition for a project, plus the
resumable multi-feature session kept in .yoom-session.md.
"""

__version__ = "1.0.0"
