"""
Feature modules for Latchkey backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- exceptions.py: Module-specific exceptions
- implementation files (service, codec, repository, managers)

Modules communicate through interfaces, not concrete implementations.
"""
