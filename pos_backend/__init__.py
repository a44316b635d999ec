"""
Restaurant point-of-sale and back-office backend
"""
__version__ = "0.1.0"
