"""
minga_api.services

Use-cases: business operations independent of HTTP and of the query engine.
"""

# Package marker.
