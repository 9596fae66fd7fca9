"""Human, quiet and JSON renderers for ServiceResult."""
