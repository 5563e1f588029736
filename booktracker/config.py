"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""
    
    # Catalog
    CATALOG_EXTENSION = os.getenv("CATALOG_EXTENSION", ".txt")
    CATALOG_ENCODING = os.getenv("CATALOG_ENCODING", "utf-8")
    
    # Error log
    ERROR_LOG_NAME = os.getenv("ERROR_LOG_NAME", "errors.log")
    
    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
