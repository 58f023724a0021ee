"""Adapter package for the HTTP and SOAP-layer implementations.

Purpose:
    Collect the concrete transport pieces: the ``requests``-backed HTTP client,
    the SOAP client that delegates to it, the zeep transport bridge, and an
    offline HTTP client double for tests.

Dependencies:
    Submodules depend on ``requests``, ``zeep``, and the domain types in
    ``soaphttp.domain``.

Call context:
    Imported by ``soaphttp`` (public API) and by tests.
"""
