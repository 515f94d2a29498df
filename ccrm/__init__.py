"""
CCRM: Campus Course Records Manager

Academic record keeping for a single institution: students, courses,
enrollments, and the grading and reporting derived from them.
"""

__version__ = "1.0.0"
__author__ = "CCRM Development Team"
__description__ = "Campus Course Records Manager"
