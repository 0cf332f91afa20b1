"""
Suraksha - Disaster preparedness learning core.

Linear unlock progression for drills, first aid and reading modules,
a sampled and timed quiz engine, scoring with badge tiers, and
student/teacher progress summaries.
"""

__version__ = "0.1.0"
