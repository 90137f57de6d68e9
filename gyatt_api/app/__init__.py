"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, errors, security and the record store;
``schemas`` the pydantic payload models; ``services`` the business
logic per domain (users, missions, suggestions); and ``api`` the
routers that expose it over HTTP.

The ASGI application lives in ``gyatt_api.app.main:app``.  It is not
imported here, so scripts that only need ``core`` (the operator
scripts, for instance) do not build an application and configure
logging as a side effect of importing this package.
"""
