"""
Backend package for the portfolio site.

This package provides a FastAPI application serving the portfolio's static
JSON content, relaying the contact form to a mail provider, listing GitHub
repositories and accepting GIS file uploads.
"""
