"""
Pipeline stages for the extension update check.

* ``marketplace`` talks to the marketplace: listing pages, metadata, packages.
* ``hashing`` digests downloaded packages.
* ``reporter`` decides whether a result is an update and renders it.
* ``update_checker`` runs the stages in order.
"""
