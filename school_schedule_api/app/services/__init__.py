"""
Service layer.

Each service encapsulates the validation and integrity rules of one
collection.  Services work on a ``Dataset`` handed over by the request
handler and never touch the record store themselves, so the same rules
apply whichever backend persists the data.
"""
