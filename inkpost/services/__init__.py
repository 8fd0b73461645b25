"""
Service layer: the operations endpoints call into.

Services take an AsyncSession, raise typed errors from inkpost.core.errors
and own the commit for the operation they perform.
"""
