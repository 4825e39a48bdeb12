"""Core data model and error hierarchy."""
