"""
Utility functions module.

Common helpers for timezone resolution and UTC instant handling shared by
the time grid, the schedule calculator and the report writer.

Time Semantics:
- Every instant passed between components is a timezone-aware UTC datetime
- Local civil time only exists inside grid construction and day-ahead lookup
- Naive datetimes handed to the helpers are treated as UTC
"""
