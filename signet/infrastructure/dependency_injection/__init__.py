"""FastAPI dependency factories wiring repositories into domain services."""
