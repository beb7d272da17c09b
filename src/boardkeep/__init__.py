"""boardkeep — owner-scoped board posts behind bcrypt credentials and JWTs.

The credential-and-ownership core: users sign up and sign in, receive a
bearer token, and create, list, re-status and delete their own board posts.
"""

__version__ = "0.1.0"
