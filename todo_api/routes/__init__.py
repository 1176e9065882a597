"""
Routes package for the to-do API.

This package contains route blueprints:
- api: root liveness message and health check
- users: registration and login
- tasks: bearer-protected task CRUD
"""
