"""Office Presence package.

Feature modules (users, delegations, access, attendance, capacity, ...)
sit behind a thin Flask JSON controller layer, with service/repository
layers holding the rules.
"""
