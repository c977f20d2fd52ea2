"""
Noktos - Corporate Hotel Reservations
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, render_template, redirect, url_for
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, create_db_client


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    config_class = config.get(config_name, config['default'])
    if config_name == 'production':
        config_class.validate()

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class)

    initialize_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_cli_commands(app)
    register_context_processors(app)
    register_teardown_handlers(app)
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    login_manager.init_app(app)
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.auth.routes import auth_bp
    from blueprints.chat.routes import chat_bp
    from blueprints.hotels.routes import hotels_bp
    from blueprints.bookings.routes import bookings_bp
    from blueprints.payments.routes import payments_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.profile.routes import profile_bp
    from blueprints.api.routes import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(chat_bp, url_prefix='/chat')
    app.register_blueprint(hotels_bp, url_prefix='/hotels')
    app.register_blueprint(bookings_bp, url_prefix='/bookings')
    app.register_blueprint(payments_bp, url_prefix='/payments')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(profile_bp, url_prefix='/profile')
    app.register_blueprint(api_bp, url_prefix='/api')

    # Set default route
    @app.route('/')
    def index():
        """The reservation assistant is the landing page."""
        return redirect(url_for('chat.index'))


def register_error_handlers(app):
    """Register error handlers."""

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        app.logger.error(f'Internal server error: {error}')
        return render_template('errors/500.html'), 500

    @app.errorhandler(403)
    def forbidden_error(error):
        """Handle 403 errors."""
        return render_template('errors/403.html'), 403


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('check-config')
    def check_config_command():
        """Check that the backend and payment settings are present."""
        missing = [
            name for name in ('SUPABASE_URL', 'SUPABASE_ANON_KEY', 'CHECKOUT_API_URL',
                              'CHECKOUT_API_KEY', 'CHAT_WEBHOOK_URL')
            if not app.config.get(name)
        ]
        if missing:
            click.echo(f'Missing settings: {", ".join(missing)}', err=True)
            raise SystemExit(1)
        click.echo('Configuration OK')

    @app.cli.command('create-user')
    @click.argument('email')
    @click.option('--name', default='', help='Full name')
    @click.option('--phone', default='', help='Phone number')
    @click.password_option()
    def create_user_command(email, name, phone, password):
        """Create an account in the auth backend."""
        client = create_db_client()
        try:
            response = client.auth.sign_up({
                'email': email,
                'password': password,
                'options': {'data': {'full_name': name, 'phone': phone}}
            })
        except Exception as e:
            click.echo(f'Error creating user: {str(e)}', err=True)
            return
        click.echo(f'User created successfully! ID: {response.user.id}')


def register_context_processors(app):
    """Register template context processors."""
    from utils import helpers
    from utils.markdown_render import render_markdown
    from utils.messages import MESSAGES, status_label

    @app.context_processor
    def utility_processor():
        """Inject utility functions into templates."""
        from utils.datetime_helpers import get_now

        return {
            'current_year': get_now().year,
            'app_name': app.config.get('APP_NAME', 'Noktos'),
            'app_version': app.config.get('APP_VERSION', '1.0.0'),
            'messages': MESSAGES,
            'split_date': helpers.split_date_es,
            'nights_label': helpers.nights_label,
            'initial': helpers.initial,
            'default_hotel_image': app.config.get('DEFAULT_HOTEL_IMAGE'),
        }

    app.add_template_filter(helpers.format_date, 'format_date')
    app.add_template_filter(helpers.format_long_date, 'format_long_date')
    app.add_template_filter(helpers.format_datetime, 'format_datetime')
    app.add_template_filter(helpers.format_currency, 'currency')
    app.add_template_filter(helpers.room_type_label, 'room_type_label')
    app.add_template_filter(status_label, 'status_label')
    app.add_template_filter(render_markdown, 'markdown')


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Drop the request's backend client."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/noktos.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        # Service modules log through their own module loggers
        for package in ('blueprints', 'models', 'database'):
            package_logger = logging.getLogger(package)
            package_logger.addHandler(file_handler)
            package_logger.setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Noktos startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
