"""
Database Base Module

Holds the shared SQLAlchemy instance for the family, rotation and dinner
models. Kept in its own module so models and services can import it
without importing the app.
"""

from flask_sqlalchemy import SQLAlchemy

# Bound to the app in create_app()
db = SQLAlchemy()
