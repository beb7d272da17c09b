"""Authentication: credentials, password hashing and bearer tokens.

Learn: Users → username/password → bcrypt-verified → JWT access token.
A presented token is validated, then its subject is looked up again so a
removed user stops working immediately. The resolved User is what every
board operation is scoped by.
"""
