"""
Utility functions module.

Wall-clock helpers used for display timestamps. Timing of the poll loop
itself goes through runtime.clock so it can be faked in tests.
"""
