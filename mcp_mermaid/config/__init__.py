"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Server, transport and rendering settings
- logging: Structured logging configuration
"""
