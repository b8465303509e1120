"""External API services package.

Contains the GitHub REST API client together with the in-memory response
cache and the rate-limit budget it consults before every request.
"""
