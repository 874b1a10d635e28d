"""Classroom Attendance package.

Organized by feature modules (classes, class_sessions, attendance, reports, ...)
with a thin Flask controller layer on top of service/repository layers.
"""
