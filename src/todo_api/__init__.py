"""
Todo service package.

A FastAPI application exposing CRUD endpoints over a single SQLite-backed
Todos table. Build the app with ``todo_api.main.create_app``.
"""
