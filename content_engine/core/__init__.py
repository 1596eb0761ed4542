"""Core configuration and enums."""
