"""
minga_api.domain

Transport- and storage-independent entities, capability interfaces, and business errors.
"""

# Package marker.
