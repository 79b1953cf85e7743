"""
Utility functions module.

Time Semantics:
- Trade timestamps are always stored as timezone-aware UTC datetimes
- Persisted timestamps are ISO8601 strings
- "Today" comparisons are made in the local timezone of the process
"""
