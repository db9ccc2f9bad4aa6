"""
AccessKontrol test suite.

- Decision and response types
- Response aggregates
- Checker base class and can_all
- Denial exceptions
"""
