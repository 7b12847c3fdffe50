"""Selftests.

Plain `test_*` functions with bare asserts: collected by pytest, and each
module also runs standalone via `python -m selftest.<module>`.
`python -m selftest.run_all` runs every module's main().
"""
