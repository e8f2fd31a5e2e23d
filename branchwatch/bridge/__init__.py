"""Bridge layer between Branchwatch and the services it consults.

Modules
-------
build_history
    ``BuildHistoryLookup`` protocol for "latest successful build of a
    configuration", with a PNC REST client and an in-memory implementation.
"""
