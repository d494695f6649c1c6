"""Authentication.

Learn: One sign-in path — email/password checked against the users
table — and one session mechanism — a signed JWT carried in a cookie
(or an Authorization: Bearer header for API clients). There is no
server-side session store; every request rebuilds the session from
the token's claims.
"""
