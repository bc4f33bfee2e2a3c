# core/utils.py

"""
Repository for program-wide utilities.
"""

import uuid


def generate_uuid() -> str:
    # record IDs for students, subjects, and marks created inside the Gradebook
    return str(uuid.uuid4())
