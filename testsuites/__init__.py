"""
Test suites package.

Kept importable so the unit suites can share the in-memory driver in
`testsuites.fakes`.
"""
