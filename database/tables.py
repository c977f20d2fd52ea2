"""Remote table names."""

BOOKINGS = 'bookings'
HOTELS = 'hoteles'
PAYMENTS = 'payments'
COMPANY_PROFILES = 'company_profiles'
USER_PREFERENCES = 'user_preferences'
INVOICES = 'invoices'
USERS = 'users'
