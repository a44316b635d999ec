"""
Core domain logic: stock, billing, language, errors, security
"""
