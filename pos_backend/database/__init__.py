"""
Database package initialization
Centralized imports for all database components
"""
from pos_backend.database.base import Base
from pos_backend.database.session import engine, AsyncSessionLocal, get_db, create_tables

__all__ = ['Base', 'engine', 'AsyncSessionLocal', 'get_db', 'create_tables']
