"""
API package containing versioned routes and shared dependencies.

A version subpackage exposes a top-level ``router`` which includes the
routers of every resource.
"""
