"""Domain layer for shiftledger.

Services are imported from their own modules (shiftledger.domain.shift,
shiftledger.domain.catalog) so that the database layer can import the
entities without pulling the services in.
"""
