"""
Environment micro-benchmark harness.

Measures the wall-clock cost of representative workloads on the running
interpreter and prints an aligned scorecard with environment metadata.
"""

__version__ = "1.0.0"
