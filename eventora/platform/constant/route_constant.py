"""Backend API routes, relative to settings.API_URL."""

# Auth
AUTH_SIGNUP = '/auth/signup'
AUTH_VERIFY_OTP = '/auth/verify-otp'
AUTH_RESEND_OTP = '/auth/resend-otp'
AUTH_LOGIN = '/auth/login'
AUTH_GOOGLE = '/auth/google'
AUTH_ME = '/auth/me'
AUTH_LOGOUT = '/auth/logout'
AUTH_FORGOT_PASSWORD = '/auth/forgot-password'
AUTH_RESET_PASSWORD = '/auth/reset-password'

# Events
EVENT_BASE = '/events'
EVENT_GET = '/events/{event_id}'
EVENT_FEATURED = '/events/featured'
EVENT_UPCOMING = '/events/upcoming'
EVENT_BY_CATEGORY = '/events/category/{category}'
EVENT_LOCATIONS = '/events/locations'
EVENT_SEATS = '/events/{event_id}/seats'
EVENT_LIVE_FETCH = '/events/live/fetch'
EVENT_LIVE_SYNC = '/events/live/sync'

# Bookings
BOOKING_BASE = '/bookings'
BOOKING_PAYMENT = '/bookings/payment'
BOOKING_MY_BOOKINGS = '/bookings/my-bookings'
BOOKING_GET = '/bookings/{booking_id}'
BOOKING_CANCEL = '/bookings/{booking_id}/cancel'

# Users
USER_PROFILE = '/users/profile'
USER_DASHBOARD = '/users/dashboard'
USER_EXPORT = '/users/export'
USER_DEACTIVATE = '/users/account/deactivate'
USER_ACCOUNT = '/users/account'
