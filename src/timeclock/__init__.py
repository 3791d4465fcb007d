"""timeclock package.

Organized by feature modules (users, projects, attendance, auth) with a thin
Flask controller layer over service/repository layers.
"""
