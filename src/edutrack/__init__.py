"""EduTrack campus attendance package.

Organized by feature modules (students, staff, sessions, attendance, ...)
with a thin Flask controller layer over service/repository layers.
"""
