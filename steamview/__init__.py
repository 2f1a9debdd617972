"""
Steam inventory viewer.

Sign in through Steam OpenID, then browse your own public inventory rendered as
server-side HTML.
"""
