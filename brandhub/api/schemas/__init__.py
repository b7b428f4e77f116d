"""
API schemas package.

Contains Pydantic models for request validation. Required fields are
Optional here so that missing values reach the services and come back
as tagged validation errors with a readable message.
"""
