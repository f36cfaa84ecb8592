"""
Backend package for the portfolio site.

This package provides a FastAPI application that stores blog posts and
project entries, serves uploaded assets and sends the subscription email.
"""
