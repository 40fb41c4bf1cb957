"""
RESUMEAI - Resume and portfolio builder

Users fill out profile, work experience, education, skills and project records;
records persist to a relational store; a preview aggregates them into a printable
resume and rates how complete it is.

Architecture:
- Records Context: Entity data structures and the scoped record store
- Editing Context: Per-collection section editors and text suggestions
- Preview Context: Aggregation, completeness scoring and document rendering
"""

__version__ = "0.1.0"
