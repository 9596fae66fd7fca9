"""Infrastructure layer — file readers, environment overrides, directory listing.

This layer turns bytes on disk into raw key/value sources. It may import
from the domain layer for schema constants and error types, never from
services, commands, or output.
"""
