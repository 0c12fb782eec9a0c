"""
span-table: aggregate `tracing` JSON span logs into a latency report.
"""

__version__ = "0.1.0"
