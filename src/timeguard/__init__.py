"""TimeGuard attendance package.

This package is organized by feature modules (users, logs, attendance, sessions, ...)
with a thin Flask controller layer on top of async service/repository layers.
"""
