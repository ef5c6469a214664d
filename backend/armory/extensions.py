# Overview: Flask extension instances and the per-app record store accessor.

from flask import current_app
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

RECORD_STORE_KEY = "armory.record_store"


def get_record_store():
    """The record store bound to the current Flask app."""
    return current_app.extensions[RECORD_STORE_KEY]
