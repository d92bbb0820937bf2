"""
NNTP News Client

A read-only client for NNTP news servers: group listing and selection,
article retrieval by message id or article number, and session transcripts.
"""

__version__ = "1.0.0"
__description__ = "Read-only NNTP news client"
