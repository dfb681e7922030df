"""Ring buffer test suite.

This package contains the tests for the byte ring buffer:
- L1: Ring Buffer Internal Unit Tests
- L2: Wraparound and Partial Transfer Tests
- L3: Critical Path Tests
"""
