"""
Test application factory and configuration.
"""

import pytest
from app import create_app


class TestAppFactory:
    """Test Flask application factory."""

    def test_create_app_development(self):
        """Test app creation with development config."""
        app = create_app('development')
        assert app is not None
        assert app.config['DEBUG'] is True
        assert app.config['TESTING'] is False

    def test_create_app_test(self):
        """Test app creation with test config."""
        app = create_app('test')
        assert app is not None
        assert app.config['TESTING'] is True
        assert app.config['WTF_CSRF_ENABLED'] is False

    def test_create_app_default(self):
        """Test app creation with default config."""
        app = create_app()
        assert app is not None

    def test_production_requires_settings(self, monkeypatch):
        """Production refuses to start without secrets and backend settings."""
        for name in ('SECRET_KEY', 'SUPABASE_URL', 'SUPABASE_ANON_KEY',
                     'CHECKOUT_API_URL', 'CHECKOUT_API_KEY'):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(ValueError):
            create_app('production')

    def test_production_rejects_short_secret(self, monkeypatch):
        monkeypatch.setenv('SECRET_KEY', 'short')
        with pytest.raises(ValueError, match='32 characters'):
            create_app('production')

    def test_app_has_blueprints(self):
        """Test that all blueprints are registered."""
        app = create_app('test')
        blueprint_names = set(app.blueprints.keys())

        assert blueprint_names == {
            'auth', 'chat', 'hotels', 'bookings', 'payments', 'admin', 'profile', 'api'
        }

    def test_app_has_extensions(self):
        """Test that extensions are initialized."""
        app = create_app('test')

        assert hasattr(app, 'login_manager')
        assert 'csrf' in app.extensions

    def test_template_filters(self):
        """Formatting filters are available to templates."""
        app = create_app('test')
        for name in ('format_date', 'format_long_date', 'format_datetime', 'currency',
                     'room_type_label', 'status_label', 'markdown'):
            assert name in app.jinja_env.filters


class TestAppConfiguration:
    """Test application configuration."""

    def test_secret_key_set(self):
        """Test that secret key is configured."""
        app = create_app('test')
        assert app.config['SECRET_KEY'] is not None
        assert len(app.config['SECRET_KEY']) > 0

    def test_backend_settings(self):
        app = create_app('test')
        assert app.config['SUPABASE_URL'].startswith('https://')
        assert app.config['CHECKOUT_API_URL']
        assert app.config['CHAT_WEBHOOK_URL']

    def test_app_name_set(self):
        """Test that app name is configured."""
        app = create_app('test')
        assert app.config.get('APP_NAME') == 'Noktos'


class TestErrorPages:
    """Custom error pages."""

    def test_404(self, client):
        response = client.get('/no-such-page')
        assert response.status_code == 404
        assert 'Página no encontrada'.encode() in response.data


class TestCLICommands:
    """Test CLI command registration."""

    def test_cli_commands_registered(self):
        """Test that CLI commands are registered."""
        app = create_app('test')

        commands = list(app.cli.commands.keys())

        assert 'check-config' in commands
        assert 'create-user' in commands

    def test_check_config(self, app):
        result = app.test_cli_runner().invoke(args=['check-config'])
        assert result.exit_code == 0
        assert 'Configuration OK' in result.output

    def test_check_config_missing(self, app):
        app.config['CHAT_WEBHOOK_URL'] = ''
        result = app.test_cli_runner().invoke(args=['check-config'])
        assert result.exit_code == 1

    def test_create_user(self, app, fake_db):
        result = app.test_cli_runner().invoke(
            args=['create-user', 'nuevo@empresa.test', '--name', 'Nuevo Usuario'],
            input='clave123\nclave123\n'
        )
        assert result.exit_code == 0
        assert 'User created successfully' in result.output
        assert 'nuevo@empresa.test' in fake_db.auth.users
        user = fake_db.auth.users['nuevo@empresa.test']['user']
        assert user.user_metadata['full_name'] == 'Nuevo Usuario'
