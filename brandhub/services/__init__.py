"""
Business logic services.

Services take a SQLAlchemy session, receive the caller's Principal
explicitly, flush (never commit) and raise brandhub.errors exceptions.
"""
