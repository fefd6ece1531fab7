"""
Service layer.

Each service encapsulates the business logic for one resource.  The
table-backed services share ``ResourceService``, which runs list
queries produced by the query translator.
"""
