"""
Configuration module.

Frozen dataclass defaults, overridden by an optional journal.yaml and then
by JOURNAL_* environment variables.
"""
