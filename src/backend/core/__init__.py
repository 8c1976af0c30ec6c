"""
core/ - Infrastructure plumbing
===============================
Configuration, logging, engine lifecycle and the error types shared by the
repository layer.
"""
