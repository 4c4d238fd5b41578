"""
Core exact-arithmetic primitives and payload contracts.

Contains the arbitrary-precision integer engine, the Gaussian-integer
complex layer built on it, and JSON Schema contracts for their payloads.
"""
