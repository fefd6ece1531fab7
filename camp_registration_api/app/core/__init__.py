"""Configuration, logging, database access and table metadata."""
