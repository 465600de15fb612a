"""Keys used in the local key/value state file."""

TOKEN_KEY = 'token'
POST_LOGIN_REDIRECT_KEY = 'postLoginRedirect'
ADVISORY_LOCK_KEY = 'event-{event_id}-booked-seats'
