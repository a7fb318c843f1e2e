"""
Webapp package for the FairGrade application.

This package contains the Flask web application components including
routes, forms and templates.
"""

__version__ = "0.1.0"
__author__ = "FairGrade Team"

from .app_factory import create_app, create_database_tables

__all__ = ["create_app", "create_database_tables"]
