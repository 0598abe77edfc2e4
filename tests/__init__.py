"""
batch-users test suite.

Account primitives are replaced by an in-memory fake (see conftest.py), so
nothing here needs root or touches the host's user database.
"""
