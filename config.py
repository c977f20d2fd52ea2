"""
Flask application configuration classes.
Provides configuration for development, production, and testing environments.
"""

import os
from datetime import timedelta


def _split_list(value: str) -> list:
    """Split a comma-separated environment value into a clean list."""
    return [item.strip().lower() for item in (value or '').split(',') if item.strip()]


class Config:
    """Base configuration class with common settings."""

    # Secret key for session management and CSRF protection
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Supabase (auth + tables)
    SUPABASE_URL = os.environ.get('SUPABASE_URL', '')
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY', '')

    # Hosted checkout API
    CHECKOUT_API_URL = os.environ.get('CHECKOUT_API_URL', '')
    CHECKOUT_API_KEY = os.environ.get('CHECKOUT_API_KEY', '')

    # Chat assistant webhook
    CHAT_WEBHOOK_URL = os.environ.get('CHAT_WEBHOOK_URL', '')
    CHAT_ANONYMOUS_PROMPT_LIMIT = int(os.environ.get('CHAT_ANONYMOUS_PROMPT_LIMIT', 3))

    # Outbound HTTP timeout (seconds)
    REQUEST_TIMEOUT = int(os.environ.get('REQUEST_TIMEOUT', 15))

    # Public base URL used to build checkout return URLs
    APP_DOMAIN = os.environ.get('APP_DOMAIN') or 'http://localhost:5000'

    # Accounts with access to the admin dashboard
    ADMIN_EMAILS = _split_list(os.environ.get('ADMIN_EMAILS', ''))

    # Security settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600  # CSRF token expires after 1 hour
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False  # Set to True in production with HTTPS
    PERMANENT_SESSION_LIFETIME = timedelta(
        hours=int(os.environ.get('SESSION_TIMEOUT_HOURS', 8))
    )

    # Booking defaults
    CURRENCY = 'mxn'
    DEFAULT_HOTEL_IMAGE = (
        'https://images.unsplash.com/photo-1566073771259-6a8506099945'
        '?ixlib=rb-4.0.3&auto=format&fit=crop&w=1170&q=80'
    )
    # Bank transfer instructions shown on the transfer page
    TRANSFER_BANK_NAME = os.environ.get('TRANSFER_BANK_NAME', '')
    TRANSFER_ACCOUNT_HOLDER = os.environ.get('TRANSFER_ACCOUNT_HOLDER', '')
    TRANSFER_CLABE = os.environ.get('TRANSFER_CLABE', '')

    INITIAL_HOTEL_SAMPLE = 3
    DASHBOARD_RECENT_LIMIT = 5

    # Timezone
    TIMEZONE = 'America/Mexico_City'

    # Application settings
    APP_NAME = 'Noktos'
    APP_VERSION = '1.0.0'


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    TESTING = False
    TEMPLATES_AUTO_RELOAD = True
    SESSION_COOKIE_SECURE = False
    WTF_CSRF_SSL_STRICT = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'true').lower() == 'true'
    WTF_CSRF_SSL_STRICT = SESSION_COOKIE_SECURE

    SECRET_KEY = os.environ.get('SECRET_KEY') or Config.SECRET_KEY

    # URL scheme preference (follows SESSION_COOKIE_SECURE setting)
    PREFERRED_URL_SCHEME = 'https' if SESSION_COOKIE_SECURE else 'http'

    @classmethod
    def validate(cls) -> None:
        """Validate that required production environment variables are set."""
        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if len(secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production")
        for name in ('SUPABASE_URL', 'SUPABASE_ANON_KEY', 'CHECKOUT_API_URL', 'CHECKOUT_API_KEY'):
            if not os.environ.get(name):
                raise ValueError(f"{name} environment variable must be set in production")


class TestConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False  # Disable CSRF for tests
    SECRET_KEY = 'test-secret-key'
    SUPABASE_URL = 'https://test-project.supabase.co'
    SUPABASE_ANON_KEY = 'test-anon-key'
    CHECKOUT_API_URL = 'https://checkout.test'
    CHECKOUT_API_KEY = 'test-checkout-key'
    CHAT_WEBHOOK_URL = 'https://chat.test/webhook'
    APP_DOMAIN = 'http://localhost'
    ADMIN_EMAILS = ['admin@noktos.test']


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
