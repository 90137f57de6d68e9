"""
Service layer abstraction.

Each service encapsulates the business logic for a domain and talks
to the injected ``RecordStore``; API handlers never touch the store
directly.  Services are built per request by the providers in
``api.deps``.
"""
