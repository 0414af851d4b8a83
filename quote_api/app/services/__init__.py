"""
Service layer abstraction.

Services encapsulate business logic.  They work on domain models and
the in‑memory store so that API handlers only deal with HTTP concerns.
"""
