"""
Test suite for gaussian-bigint

Contains:
- tests/unit/          : Unit tests for magnitudes, BigInt, BigComplex and payload contracts
"""
