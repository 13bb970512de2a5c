"""
minga_api.api.routers

Router modules, one per resource.
"""
