"""
Enum definitions for the SQL vs NoSQL Users Demo
"""

from enum import Enum

class DatabaseType(str, Enum):
    SQL = "SQL"
    NOSQL = "NoSQL"

class BackendKey(str, Enum):
    """Route segment identifying which store serves a request"""
    SUPABASE = "supabase"
    MONGODB = "mongodb"

class ServiceErrorType(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_IDENTITY = "INVALID_IDENTITY"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONSTRAINT_ERROR = "CONSTRAINT_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
