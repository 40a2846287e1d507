"""Coursebook package.

School/course management backend organized by feature modules (users,
courses, attendance, grades, reports) with a thin Flask controller layer
over service/repository layers.
"""
