"""Authentication and authorization.

Learn: Three small pieces make up the whole security core:
1. password.py → bcrypt hashing for stored credentials
2. jwt.py → signed, 7-day bearer tokens carrying the user id
3. dependencies.py + ownership.py → token → identity → may this
   identity touch this listing?

Only the token-derived identity is trusted. Nothing a client asserts
about itself (ids in bodies, local UI state) feeds an authorization check.
"""
