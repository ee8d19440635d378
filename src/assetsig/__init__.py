"""AssetSig - read-only asset inventory API.

Serves a paginated, filterable list of hosts with their IP addresses and
ports, annotating every record with a content-derived SHA-256 signature.
"""

__version__ = "0.1.0"
