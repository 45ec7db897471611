"""
Web framework adapters implementing :class:`sixpack_client.context.RequestContext`.

Adapters are imported explicitly so the framework stays an optional dependency.
"""
