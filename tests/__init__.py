"""
Test suite for the SMS Expense Tracker.

Architecture: Hexagonal (Ports & Adapters)
Testing Strategy:
- Unit tests: SMS parser, identity, domain entities
- Use case tests: coordinator and review flow with in-memory adapters
- Adapter tests: asyncpg adapters with mocked pools, file-backed stores with tmp_path
- Integration tests: real PostgreSQL (marked ``integration``)
"""
