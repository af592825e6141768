"""Catering Personnel package.

Staff lifecycle and leave accounting for a catering company, organized by
feature modules (collaborators, leaves, performance, ...) around a single
permission-gated controller (``personnel.manager.PersonnelManager``).
"""
