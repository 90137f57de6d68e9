"""
Pydantic schema definitions for API payloads.

Each domain (users, missions, suggestions) defines its own models for
request and response bodies.  Attributes are snake_case in Python and
camelCase on the wire and in the JSON data files, so existing data
and clients keep working unchanged.
"""
