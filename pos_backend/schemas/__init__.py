"""
Request/response schemas grouped by resource
"""
