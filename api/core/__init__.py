"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (DB handle,
schema, settings, error kinds, enum validators). Keep feature-specific SQL
and business rules in the corresponding feature package (e.g. `cars/`).
"""
